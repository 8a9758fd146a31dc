import re
from pathlib import Path

import pandas as pd

BENCHMARK_KINDS = ("single_thread", "multi_thread", "gaming", "compute")


# Slug builder for GPUs: keep series/model tokens only
def build_gpu_slug(name: str) -> str:
    if not isinstance(name, str):
        return ""
    s = name.upper()
    s = re.sub(r"\b(GEFORCE|RADEON|NVIDIA|AMD|INTEL)\b", "", s)
    s = re.sub(r"\s+", " ", s).strip()
    tokens = re.findall(r"(RTX|RX|ARC|\d{3,4}|TI|SUPER|XTX|XT)", s)
    return "-".join(tok.lower() for tok in tokens)


# Slug builder for CPUs (drop family prefixes like i5/i7, Ryzen 7/9)
def build_cpu_slug(name: str) -> str:
    if not isinstance(name, str):
        return ""
    s = name.upper().strip()
    s = re.sub(r"\b(INTEL|AMD|RYZEN|CORE|PROCESSOR|CPU|I3|I5|I7|I9)\b", "", s)
    s = re.sub(r"\s+", " ", s).strip()

    m = re.search(r"\b(\d{4,5}(?:X3D|XT|X|G|GT|GE|F|K|KF|KS|T)?)\b", s)
    if m:
        return m.group(1).lower()
    return re.sub(r"[^a-z0-9]+", "-", s.lower()).strip("-")


def normalize_scores(scores: pd.Series, ceiling=None) -> pd.Series:
    """Scale raw benchmark numbers onto 0-100, the best entry scoring 100.

    ``ceiling`` pins the raw value that maps to 100 instead of the column
    maximum. Non-numeric entries become NaN.
    """
    values = pd.to_numeric(scores, errors="coerce")
    top = ceiling if ceiling else values.max()
    if not top or pd.isna(top):
        return values * 0
    return (values / top * 100).clip(lower=0, upper=100).round(2)


def load_benchmark_table(path, kind: str, name_col="Model", score_col="Benchmark", category="gpu"):
    """Read a raw benchmark CSV into (slug, kind, score) rows on the 0-100 scale."""
    if kind not in BENCHMARK_KINDS:
        raise ValueError(f"Unknown benchmark kind {kind!r}")
    df = pd.read_csv(Path(path), encoding="utf-8-sig")
    cols = {c.lower(): c for c in df.columns}
    col_name = cols.get(name_col.lower())
    col_score = cols.get(score_col.lower())
    if col_name is None or col_score is None:
        raise ValueError(
            f"{Path(path).name} must contain '{name_col}' and '{score_col}' columns."
        )
    slugger = build_cpu_slug if category == "cpu" else build_gpu_slug
    out = pd.DataFrame(
        {
            "slug": df[col_name].astype(str).map(slugger),
            "kind": kind,
            "score": normalize_scores(df[col_score]),
        }
    )
    out = out[(out["slug"] != "") & out["score"].notna()]
    # the same model can appear several times; keep its best run
    return out.sort_values("score", ascending=False).drop_duplicates("slug")
