"""
Dataset-wide analytics — totals, year range, per-decade and per-make rollups.
"""
from __future__ import annotations

from carcatalog.analytics.common import mean_rounded, value_range
from carcatalog.data.store import DatasetStore


def _distinct_sorted(values) -> list[str]:
    return sorted(values.dropna().unique().tolist())


def get_analytics(store: DatasetStore) -> dict:
    """Counts, distinct makes/countries/body types, year range, average horsepower."""
    df = store.frame
    makes = _distinct_sorted(df["make"])
    countries = _distinct_sorted(df["country"])
    body_types = _distinct_sorted(df["body_type"])

    return {
        "total_cars": len(df),
        "total_makes": len(makes),
        "total_countries": len(countries),
        "total_body_types": len(body_types),
        "year_range": value_range(df["year_from"], df["year_to"]),
        "average_horsepower": mean_rounded(df["horsepower"]),
        "makes": makes,
        "countries": countries,
        "body_types": body_types,
    }


def cars_by_decade(store: DatasetStore) -> list[dict]:
    """One entry per decade of ``year_from``, ascending. Undated records are left out."""
    df = store.frame
    dated = df[df["year_from"].notna()]
    if dated.empty:
        return []

    decade = (dated["year_from"] // 10 * 10).astype(int).rename("decade")
    results = []
    for dec, group in dated.groupby(decade, sort=True):
        results.append({
            "decade": int(dec),
            "count": len(group),
            "makes": int(group["make"].nunique()),
            "avg_horsepower": mean_rounded(group["horsepower"]),
            "avg_max_speed": mean_rounded(group["max_speed"]),
            "body_types": group["body_type"].dropna().unique().tolist(),
        })
    return results


def make_statistics(store: DatasetStore, make: str) -> dict | None:
    """Rollup for one make (case-insensitive). ``None`` if the make is unknown."""
    df = store.frame
    matches = df[df["make_lc"] == make.lower()]
    if matches.empty:
        return None

    horsepower = matches["horsepower"].dropna()
    most_powerful = None
    if not horsepower.empty:
        # idxmax returns the first position on ties, i.e. load order
        most_powerful = store.records[horsepower.idxmax()].to_dict()

    return {
        "make": make,
        "total_models": len(matches),
        "year_range": value_range(matches["year_from"], matches["year_to"]),
        "models": matches["model"].unique().tolist(),
        "body_types": matches["body_type"].dropna().unique().tolist(),
        "avg_horsepower": mean_rounded(matches["horsepower"]),
        "avg_max_speed": mean_rounded(matches["max_speed"]),
        "most_powerful": most_powerful,
    }
