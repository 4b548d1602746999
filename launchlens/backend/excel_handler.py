
import io
from typing import Any, Dict, List
from openpyxl import Workbook
from openpyxl.styles import PatternFill, Font
from openpyxl.utils import get_column_letter
from schemas import Project
from tools import score_band

HEADER = [
	"Project", "Owner", "Score (0-100)", "Band", "Clarity", "Market Fit",
	"Feasibility", "Differentiation", "Created",
]

BAND_FILLS = {
	"green": PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"),
	"yellow": PatternFill(start_color="FFF9C4", end_color="FFF9C4", fill_type="solid"),
	"red": PatternFill(start_color="FFCDD2", end_color="FFCDD2", fill_type="solid"),
}

COLUMN_WIDTHS = [30, 15, 12, 10, 10, 12, 12, 15, 20]


def individual_scores(project: Project) -> Dict[str, Any]:
	# evaluationData is stored as sent by the client: {"evaluation": {...}} or the evaluation itself
	data = project.evaluation_data.get("evaluation", project.evaluation_data)
	scores = data.get("individualScores") if isinstance(data, dict) else None
	return scores if isinstance(scores, dict) else {}


def create_projects_excel(projects: List[Project]) -> bytes:
	wb = Workbook()
	ws = wb.active
	ws.title = "Projects"
	ws.append(HEADER)
	for cell in ws[1]:
		cell.font = Font(bold=True)
	for p in sorted(projects, key=lambda p: p.overall_score, reverse=True):
		band, _ = score_band(p.overall_score)
		scores = individual_scores(p)
		ws.append([
			p.name, p.owner, p.overall_score, band,
			scores.get("clarity"), scores.get("marketFit"),
			scores.get("feasibility"), scores.get("differentiation"),
			p.created_at.strftime("%Y-%m-%d %H:%M"),
		])
		for cell in ws[ws.max_row]:
			cell.fill = BAND_FILLS[band]
	for i, width in enumerate(COLUMN_WIDTHS, 1):
		ws.column_dimensions[get_column_letter(i)].width = width
	output = io.BytesIO()
	wb.save(output)
	return output.getvalue()
