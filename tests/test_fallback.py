import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'launchlens', 'backend')))

from fallback import (
	FALLBACK_SNAPSHOT, fallback_chat_response, fallback_evaluation, fallback_market_insights,
	fallback_market_news, fallback_similar_startups,
)
from sample_data import answers_with


class TestFallbackEvaluation(unittest.TestCase):

	def assert_scores_in_bounds(self, result, filled):
		base = filled * 10
		self.assertGreaterEqual(result.overall_score, min(100, base))
		self.assertLessEqual(result.overall_score, min(100, base + 19))
		for name, score in result.individual_scores.model_dump().items():
			with self.subTest(score=name):
				self.assertGreaterEqual(score, result.overall_score)
				self.assertLessEqual(score, min(100, result.overall_score + 9))

	def test_scores_stay_in_bounds_for_every_answer_count(self):
		rng = random.Random(7)
		for filled in range(0, 11):
			for _ in range(25):
				self.assert_scores_in_bounds(fallback_evaluation(answers_with(filled), rng), filled)

	def test_scores_capped_at_100(self):
		class MaxRandom:
			def randint(self, a, b):
				return b
		result = fallback_evaluation(answers_with(10), MaxRandom())
		self.assertEqual(result.overall_score, 100)
		self.assertEqual(result.individual_scores.clarity, 100)

	def test_whitespace_answers_do_not_count(self):
		answers = answers_with(7)
		answers[7] = "   "
		result = fallback_evaluation(answers, random.Random(1))
		self.assertLess(result.overall_score, 90)

	def test_text_is_fixed_regardless_of_input(self):
		a = fallback_evaluation(answers_with(7), random.Random(1))
		b = fallback_evaluation(answers_with(10), random.Random(2))
		self.assertEqual(a.executive_snapshot, FALLBACK_SNAPSHOT)
		for field in ("strengths", "weaknesses", "opportunities", "threats", "recommendations",
				"pattern_match", "next_question", "business_valuation", "funding_readiness",
				"market_momentum", "risk_exposure", "similar_startups"):
			with self.subTest(field=field):
				self.assertEqual(getattr(a, field), getattr(b, field))
		self.assertEqual(len(a.strengths), 3)
		self.assertEqual(len(a.opportunities), 2)
		self.assertEqual(a.similar_startups, fallback_similar_startups())


class TestFallbackChat(unittest.TestCase):

	def setUp(self):
		self.evaluation = {
			"overallScore": 72,
			"strengths": ["Clear buyer", "Domain expertise", "Timing"],
			"concerns": ["Small market", "Bundling risk"],
			"recommendations": ["Sign three design partners"],
		}

	def test_score_question(self):
		reply = fallback_chat_response("What does my SCORE mean?", self.evaluation)
		self.assertEqual(reply, "Your overall score is 72/100. This indicates strong potential.")

	def test_strengths_question(self):
		reply = fallback_chat_response("what is good here", self.evaluation)
		self.assertIn("Clear buyer and Domain expertise", reply)

	def test_concerns_question(self):
		reply = fallback_chat_response("biggest problem?", self.evaluation)
		self.assertIn("Small market and Bundling risk", reply)

	def test_recommendation_question(self):
		reply = fallback_chat_response("what should I do", self.evaluation)
		self.assertEqual(reply, "Based on your evaluation, I recommend: Sign three design partners.")

	def test_default_and_missing_fields(self):
		self.assertIn("72/100", fallback_chat_response("hello", self.evaluation))
		reply = fallback_chat_response("list my weakness", {})
		self.assertIn("Competitive advantage and revenue model", reply)


class TestFallbackMarket(unittest.TestCase):

	def test_insights_depend_on_scores_and_are_capped(self):
		strong = {"individualScores": {"clarity": 80, "marketFit": 80, "feasibility": 80, "differentiation": 30}}
		insights = fallback_market_insights(strong)
		self.assertEqual(len(insights), 4)
		self.assertEqual(insights[0].startup_name, "ClearVision AI")

	def test_insights_without_scores(self):
		names = [i.startup_name for i in fallback_market_insights({})]
		self.assertEqual(names, ["StartupFlow", "InnovateCorp"])

	def test_insights_ignore_malformed_scores(self):
		for scores in ({"clarity": "85", "marketFit": None, "feasibility": True, "differentiation": "10"}, [1, 2], "high"):
			with self.subTest(scores=scores):
				names = [i.startup_name for i in fallback_market_insights({"individualScores": scores})]
				self.assertEqual(names, ["StartupFlow", "InnovateCorp"])

	def test_insights_accept_float_scores(self):
		names = [i.startup_name for i in fallback_market_insights({"individualScores": {"clarity": 72.5}})]
		self.assertEqual(names[0], "ClearVision AI")

	def test_news(self):
		news = fallback_market_news()
		self.assertTrue(news)
		self.assertTrue(all(n.title and n.source for n in news))


if __name__ == '__main__':
	unittest.main()
