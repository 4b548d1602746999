
import logging
import secrets
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from agents import EvaluationClient
from analytics import dashboard_summary
from config import Settings, load_settings
from excel_handler import create_projects_excel
from fallback import fallback_evaluation, fallback_market_insights, fallback_market_news
from pipeline import evaluate_answers, generate_chat_response, generate_market_insights, generate_market_news
from projects import ProjectStore
from ratelimit import FixedWindowLimiter
from schemas import MIN_ANSWERED, ChatRequest, EvaluateRequest, MarketRequest, ProjectCreate
from tools import count_answered, to_public_evaluation

logger = logging.getLogger(__name__)

INVALID_BODY_ERRORS = {
	"/api/evaluate": "Invalid answers format",
	"/api/chat": "Message and evaluation data are required",
	"/api/market-insights": "Answers and evaluation data are required",
	"/api/market-news": "Answers and evaluation data are required",
	"/api/projects/save": "Missing required fields: name, answers, evaluationData",
}
RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
CHAT_UNAVAILABLE = "I'm having trouble processing your request right now. Please try again."

router = APIRouter(prefix="/api")


def evaluation_of(evaluation_data: dict) -> dict:
	evaluation = evaluation_data.get("evaluation")
	return evaluation if isinstance(evaluation, dict) else {}


def require_admin(request: Request, x_admin_token: Optional[str] = Header(default=None)):
	token = request.app.state.settings.admin_token
	if token and not secrets.compare_digest((x_admin_token or "").encode(), token.encode()):
		raise HTTPException(status_code=401, detail="Admin authentication required")


@router.post("/evaluate")
async def evaluate(req: EvaluateRequest, request: Request):
	answered = count_answered(req.answers)
	if answered < MIN_ANSWERED:
		return JSONResponse(status_code=400, content={"success": False, "error": f"Please answer at least {MIN_ANSWERED} questions"})
	state = request.app.state
	try:
		result = await evaluate_answers(req.answers, state.settings, state.client)
	except Exception:
		logger.exception("Evaluation pipeline failed, using fallback evaluation")
		result = fallback_evaluation(req.answers)
	state.projects.record_evaluation()
	logger.info("Evaluation completed (score=%d)", result.overall_score)
	return {"success": True, "evaluation": to_public_evaluation(result).model_dump(by_alias=True)}


@router.post("/chat")
async def chat(req: ChatRequest, request: Request):
	state = request.app.state
	try:
		reply = await generate_chat_response(req.message, evaluation_of(req.evaluation_data), state.settings, state.client)
	except Exception:
		logger.exception("Chat request failed")
		return {"success": False, "response": CHAT_UNAVAILABLE}
	return {"success": True, "response": reply}


@router.post("/market-insights")
async def market_insights(req: MarketRequest, request: Request):
	state = request.app.state
	evaluation = evaluation_of(req.evaluation_data)
	try:
		insights = await generate_market_insights(req.answers, evaluation, state.settings, state.client)
	except Exception:
		logger.exception("Market insights failed")
		return {"success": False, "insights": [i.model_dump(by_alias=True) for i in fallback_market_insights(evaluation)]}
	return {"success": True, "insights": [i.model_dump(by_alias=True) for i in insights]}


@router.post("/market-news")
async def market_news(req: MarketRequest, request: Request):
	try:
		news = await generate_market_news(req.answers, request.app.state.client)
	except Exception:
		logger.exception("Market news failed")
		return {"success": False, "news": [n.model_dump(by_alias=True) for n in fallback_market_news()]}
	return {"success": True, "news": [n.model_dump(by_alias=True) for n in news]}


@router.get("/health")
async def health(request: Request):
	return {
		"status": "healthy",
		"timestamp": datetime.now(timezone.utc).isoformat(),
		"aiConfigured": request.app.state.settings.chat_configured,
	}


@router.post("/projects/save")
async def save_project(req: ProjectCreate, request: Request, x_user_id: str = Header(default="anonymous")):
	project = request.app.state.projects.save(x_user_id, req)
	return {"success": True, "projectId": project.id, "message": "Project saved successfully"}


@router.get("/projects/my-projects")
async def my_projects(request: Request, x_user_id: str = Header(default="anonymous")):
	projects = request.app.state.projects.list_for(x_user_id)
	fields = {"id", "name", "description", "overall_score", "created_at", "updated_at"}
	return {"success": True, "projects": [p.model_dump(mode="json", by_alias=True, include=fields) for p in projects]}


@router.get("/projects/{project_id}")
async def get_project(project_id: int, request: Request, x_user_id: str = Header(default="anonymous")):
	project = request.app.state.projects.get(x_user_id, project_id)
	if project is None:
		raise HTTPException(status_code=404, detail="Project not found")
	return {"success": True, "project": project.model_dump(mode="json", by_alias=True, exclude={"owner"})}


@router.delete("/projects/{project_id}")
async def delete_project(project_id: int, request: Request, x_user_id: str = Header(default="anonymous")):
	if not request.app.state.projects.delete(x_user_id, project_id):
		raise HTTPException(status_code=404, detail="Project not found")
	return {"success": True, "message": "Project deleted successfully"}


@router.get("/admin/dashboard", dependencies=[Depends(require_admin)])
async def admin_dashboard(request: Request):
	store = request.app.state.projects
	return {"success": True, "data": dashboard_summary(store.all(), store.evaluation_counts)}


@router.get("/admin/export", dependencies=[Depends(require_admin)])
async def admin_export(request: Request):
	projects = request.app.state.projects.all()
	if not projects:
		return JSONResponse(status_code=404, content={"success": False, "error": "No projects available to export."})
	headers = {
		"Content-Disposition": "attachment; filename=launchlens_projects.xlsx"
	}
	return Response(content=create_projects_excel(projects), media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", headers=headers)


def create_app(settings: Optional[Settings] = None, client: Optional[EvaluationClient] = None) -> FastAPI:
	settings = settings or load_settings()
	logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

	app = FastAPI(title="LaunchLens API", version="1.0")
	app.add_middleware(
		CORSMiddleware,
		allow_origins=["*"],
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	app.state.settings = settings
	app.state.client = client or EvaluationClient(settings)
	app.state.projects = ProjectStore()
	app.state.limiter = FixedWindowLimiter(settings.rate_limit_max, settings.rate_limit_window_seconds)

	@app.middleware("http")
	async def rate_limit(request: Request, call_next):
		if not request.url.path.startswith("/api/"):
			return await call_next(request)
		limiter = request.app.state.limiter
		key = request.client.host if request.client else "unknown"
		if not limiter.hit(key):
			logger.warning("Rate limit exceeded for %s", key)
			return JSONResponse(status_code=429, content={"success": False, "error": RATE_LIMIT_MESSAGE})
		response = await call_next(request)
		response.headers["RateLimit-Limit"] = str(limiter.max_requests)
		response.headers["RateLimit-Remaining"] = str(limiter.remaining(key))
		return response

	@app.exception_handler(RequestValidationError)
	async def invalid_body(request: Request, exc: RequestValidationError):
		error = INVALID_BODY_ERRORS.get(request.url.path, "Invalid request")
		return JSONResponse(status_code=400, content={"success": False, "error": error})

	@app.exception_handler(StarletteHTTPException)
	async def http_error(request: Request, exc: StarletteHTTPException):
		return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail})

	app.include_router(router)
	logger.info("AI evaluation: %s", "configured" if settings.chat_configured else "not configured, using fallback")
	return app


app = create_app()

if __name__ == "__main__":
	import uvicorn
	uvicorn.run("main:app", host="0.0.0.0", port=app.state.settings.port)
