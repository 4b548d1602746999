import unittest
import io
import json
import sys
import os

from fastapi.testclient import TestClient
from openpyxl import load_workbook

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'launchlens', 'backend')))

from config import Settings
from main import create_app
from sample_data import ANSWERS, SIMILAR_STARTUPS_REPLY, VALID_EVALUATION, FakeClient, answers_with


class ApiTestCase(unittest.TestCase):

	settings = Settings()

	def setUp(self):
		self.fake = FakeClient()
		self.app = create_app(self.settings, client=self.fake)
		self.http = TestClient(self.app)


class TestEvaluateEndpoint(ApiTestCase):

	def test_rejects_fewer_than_seven_answers(self):
		response = self.http.post("/api/evaluate", json={"answers": answers_with(6)})
		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json(), {"success": False, "error": "Please answer at least 7 questions"})

	def test_rejects_malformed_body(self):
		for body in ({}, {"answers": "all of them"}, {"answers": ANSWERS[:9]}):
			with self.subTest(body=body):
				response = self.http.post("/api/evaluate", json=body)
				self.assertEqual(response.status_code, 400)
				self.assertEqual(response.json()["error"], "Invalid answers format")

	def test_fallback_evaluation_without_api_key(self):
		response = self.http.post("/api/evaluate", json={"answers": answers_with(7)})
		self.assertEqual(response.status_code, 200)
		body = response.json()
		self.assertTrue(body["success"])
		evaluation = body["evaluation"]
		self.assertTrue(70 <= evaluation["overallScore"] <= 100)
		for score in evaluation["individualScores"].values():
			self.assertGreaterEqual(score, evaluation["overallScore"])
		self.assertEqual(len(evaluation["concerns"]), 3)
		self.assertEqual(evaluation["nextSteps"], ["What's your biggest concern about this startup idea?"])
		self.assertNotIn("weaknesses", evaluation)
		self.assertEqual(evaluation["riskExposure"]["level"], "red")


class TestEvaluateWithModel(ApiTestCase):

	settings = Settings(deepseek_api_key="sk-test")

	def test_model_result_is_returned_with_public_names(self):
		self.fake.replies = [f"Result: {json.dumps(VALID_EVALUATION)} Done.", SIMILAR_STARTUPS_REPLY]
		evaluation = self.http.post("/api/evaluate", json={"answers": ANSWERS}).json()["evaluation"]
		self.assertEqual(evaluation["overallScore"], 55)
		self.assertEqual(evaluation["concerns"], VALID_EVALUATION["weaknesses"])
		self.assertEqual(evaluation["nextSteps"], [VALID_EVALUATION["nextQuestion"]])
		self.assertEqual(evaluation["similarStartups"][0]["name"], "Hummingbird")

	def test_unexpected_pipeline_error_still_succeeds(self):
		self.fake.error = RuntimeError("unexpected")
		body = self.http.post("/api/evaluate", json={"answers": ANSWERS}).json()
		self.assertTrue(body["success"])
		self.assertIn("overallScore", body["evaluation"])

	def test_chat(self):
		self.fake.replies = ['{"response": "Focus on distribution."}']
		body = self.http.post("/api/chat", json={
			"message": "What next?",
			"evaluationData": {"evaluation": {"overallScore": 55}},
		}).json()
		self.assertEqual(body, {"success": True, "response": "Focus on distribution."})
		self.assertIn("Overall Score: 55/100", self.fake.prompts[0])


class TestAuxiliaryEndpoints(ApiTestCase):

	def test_chat_requires_message_and_evaluation(self):
		response = self.http.post("/api/chat", json={"message": "hi"})
		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json()["error"], "Message and evaluation data are required")

	def test_chat_fallback(self):
		body = self.http.post("/api/chat", json={
			"message": "what is my score",
			"evaluationData": {"evaluation": {"overallScore": 40}},
		}).json()
		self.assertTrue(body["success"])
		self.assertIn("significant areas for improvement", body["response"])

	def test_market_insights_and_news(self):
		payload = {"answers": ANSWERS, "evaluationData": {"evaluation": {"individualScores": {"clarity": 80}}}}
		insights = self.http.post("/api/market-insights", json=payload).json()
		self.assertTrue(insights["success"])
		self.assertEqual(insights["insights"][0]["startupName"], "ClearVision AI")
		news = self.http.post("/api/market-news", json=payload).json()
		self.assertTrue(news["success"])
		self.assertTrue(news["news"])

	def test_market_insights_with_malformed_scores(self):
		for scores in ({"clarity": "85"}, [1, 2]):
			with self.subTest(scores=scores):
				payload = {"answers": ANSWERS, "evaluationData": {"evaluation": {"individualScores": scores}}}
				response = self.http.post("/api/market-insights", json=payload)
				self.assertEqual(response.status_code, 200)
				body = response.json()
				self.assertTrue(body["success"])
				self.assertEqual([i["startupName"] for i in body["insights"]], ["StartupFlow", "InnovateCorp"])

	def test_health(self):
		body = self.http.get("/api/health").json()
		self.assertEqual(body["status"], "healthy")
		self.assertFalse(body["aiConfigured"])
		self.assertIn("timestamp", body)


class TestRateLimit(ApiTestCase):

	settings = Settings(rate_limit_max=2)

	def test_fixed_window(self):
		self.assertEqual(self.http.get("/api/health").status_code, 200)
		second = self.http.get("/api/health")
		self.assertEqual(second.headers["RateLimit-Remaining"], "0")
		blocked = self.http.get("/api/health")
		self.assertEqual(blocked.status_code, 429)
		self.assertFalse(blocked.json()["success"])


class TestProjects(ApiTestCase):

	def save(self, name, score, user="alice"):
		response = self.http.post("/api/projects/save", headers={"X-User-Id": user}, json={
			"name": name,
			"answers": ANSWERS,
			"evaluationData": {"evaluation": VALID_EVALUATION},
			"overallScore": score,
		})
		self.assertEqual(response.status_code, 200)
		return response.json()["projectId"]

	def test_save_list_get_delete(self):
		first = self.save("Compliance copilot", 55)
		self.save("Other idea", 40, user="bob")
		listing = self.http.get("/api/projects/my-projects", headers={"X-User-Id": "alice"}).json()
		self.assertEqual([p["name"] for p in listing["projects"]], ["Compliance copilot"])
		self.assertNotIn("answers", listing["projects"][0])

		project = self.http.get(f"/api/projects/{first}", headers={"X-User-Id": "alice"}).json()["project"]
		self.assertEqual(project["answers"], ANSWERS)
		self.assertEqual(project["overallScore"], 55)

		self.assertEqual(self.http.get(f"/api/projects/{first}", headers={"X-User-Id": "bob"}).status_code, 404)
		self.assertEqual(self.http.delete(f"/api/projects/{first}", headers={"X-User-Id": "bob"}).status_code, 404)
		self.assertTrue(self.http.delete(f"/api/projects/{first}", headers={"X-User-Id": "alice"}).json()["success"])
		missing = self.http.get(f"/api/projects/{first}", headers={"X-User-Id": "alice"})
		self.assertEqual(missing.json(), {"success": False, "error": "Project not found"})

	def test_save_requires_fields(self):
		response = self.http.post("/api/projects/save", json={"name": "x"})
		self.assertEqual(response.status_code, 400)

	def test_admin_dashboard_and_export(self):
		self.save("Low", 30)
		self.save("High", 82, user="bob")
		self.http.post("/api/evaluate", json={"answers": answers_with(7)})

		data = self.http.get("/api/admin/dashboard").json()["data"]
		self.assertEqual(data["totals"]["projects"], 2)
		self.assertEqual(data["totals"]["averageScore"], 56.0)
		self.assertEqual(data["totals"]["scoreBands"], {"green": 1, "yellow": 0, "red": 1})
		self.assertEqual(data["today"]["evaluations"], 1)

		export = self.http.get("/api/admin/export")
		self.assertEqual(export.status_code, 200)
		sheet = load_workbook(io.BytesIO(export.content)).active
		self.assertEqual(sheet.max_row, 3)
		self.assertEqual(sheet.cell(row=2, column=1).value, "High")
		self.assertEqual(sheet.cell(row=2, column=5).value, 62)


class TestAdminToken(ApiTestCase):

	settings = Settings(admin_token="s3cret")

	def test_admin_routes_require_token(self):
		self.assertEqual(self.http.get("/api/admin/dashboard").status_code, 401)
		response = self.http.get("/api/admin/dashboard", headers={"X-Admin-Token": "s3cret"})
		self.assertEqual(response.status_code, 200)
		self.assertEqual(self.http.get("/api/admin/export", headers={"X-Admin-Token": "s3cret"}).status_code, 404)

	def test_wrong_token_is_rejected(self):
		for token in ("s3cre", "s3cret!", "S3CRET"):
			with self.subTest(token=token):
				response = self.http.get("/api/admin/dashboard", headers={"X-Admin-Token": token})
				self.assertEqual(response.status_code, 401)
				self.assertEqual(response.json(), {"success": False, "error": "Admin authentication required"})


if __name__ == '__main__':
	unittest.main()
