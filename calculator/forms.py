from django import forms

PURPOSE_CHOICES = [
    ("gaming", "Gaming"),
    ("productivity", "Productivity"),
    ("streaming", "Streaming"),
    ("workstation", "Workstation"),
]


class RecommendationForm(forms.Form):
    budget = forms.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        label="Budget",
    )
    purposes = forms.MultipleChoiceField(
        choices=PURPOSE_CHOICES,
        required=False,
        label="Purposes",
    )

