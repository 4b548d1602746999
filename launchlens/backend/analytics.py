
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence
import pandas as pd
from schemas import Project
from tools import score_band

BANDS = ("green", "yellow", "red")


def dashboard_summary(projects: Sequence[Project], evaluation_counts: Mapping[date, int], today: Optional[date] = None) -> Dict[str, Any]:
	today = today or datetime.now(timezone.utc).date()
	week_start = today - timedelta(days=6)

	df = pd.DataFrame(
		[{"score": p.overall_score, "created": p.created_at.date()} for p in projects],
		columns=["score", "created"],
	)
	if df.empty:
		recent_projects = 0
		average_score = 0.0
		band_counts = {b: 0 for b in BANDS}
	else:
		df["created"] = pd.to_datetime(df["created"])
		recent_projects = int((df["created"] >= pd.Timestamp(week_start)).sum())
		average_score = round(float(df["score"].mean()), 1)
		counts = df["score"].map(lambda s: score_band(int(s))[0]).value_counts()
		band_counts = {b: int(counts.get(b, 0)) for b in BANDS}

	per_day = pd.Series(dict(evaluation_counts), dtype="int64")
	weekly: List[Dict[str, Any]] = []
	for day in pd.date_range(week_start, today, freq="D")[::-1]:
		d = day.date()
		weekly.append({"date": d.isoformat(), "evaluations": int(per_day.get(d, 0))})

	return {
		"today": {"date": today.isoformat(), "evaluations": int(per_day.get(today, 0))},
		"totals": {
			"projects": len(df),
			"recentProjects": recent_projects,
			"averageScore": average_score,
			"scoreBands": band_counts,
		},
		"weekly": weekly,
	}
