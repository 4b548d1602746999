
import json
from typing import Any, Dict, Sequence
from schemas import EvaluationResult, SearchSnippet

SYSTEM_PROMPT = "You are a critical startup analyst. Always respond with valid JSON only."

# (title, analysis template); "{answer}" is replaced with the founder's literal answer
QUESTION_PROMPTS = [
	("Value Proposition Analysis", """Analyze this value proposition critically: "{answer}".
- Is this genuinely innovative or just incremental improvement?
- What existing solutions does this compete with?
- Is the differentiation clear and defensible?
- Rate innovation level: 1-10 (be harsh, most ideas are 3-4/10)"""),
	("Competitive Advantage Assessment", """Evaluate this competitive advantage: "{answer}".
- Is this truly defensible or easily copied?
- What barriers to entry exist?
- How long before competitors catch up?
- Rate defensibility: 1-10 (most advantages are temporary)"""),
	("Customer Persona Validation", """Assess this customer description: "{answer}".
- Is the persona specific enough or too broad?
- Are pain points validated or assumed?
- What's the total addressable market size?
- Rate market clarity: 1-10 (be realistic about market size)"""),
	("Market Timing Analysis", """Evaluate market timing: "{answer}".
- Is this trend real or hype?
- What evidence supports "why now"?
- Are there regulatory/economic headwinds?
- Rate timing: 1-10 (most timing claims are weak)"""),
	("Problem-Solution Fit", """Analyze this problem statement: "{answer}".
- Is this a real pain or nice-to-have?
- How painful is it on a 1-10 scale?
- Do people currently pay to solve this?
- Rate problem severity: 1-10 (be critical)"""),
	("Risk Assessment", """Evaluate these risks: "{answer}".
- Are major risks identified or ignored?
- What could kill this business?
- How likely are these risks?
- Rate risk awareness: 1-10 (most founders underestimate risks)"""),
	("Customer Dependency Analysis", """Assess customer dependency: "{answer}".
- Would customers actually miss this?
- What's the switching cost?
- How sticky is the solution?
- Rate customer stickiness: 1-10 (be realistic)"""),
	("Monetization Model", """Evaluate monetization: "{answer}".
- Is the revenue model clear and proven?
- Will customers actually pay this amount?
- What's the unit economics?
- Rate monetization clarity: 1-10 (most models are unclear)"""),
	("Vision & Scalability", """Assess long-term vision: "{answer}".
- Is the vision realistic or fantasy?
- What's the path to scale?
- Are there natural expansion opportunities?
- Rate vision clarity: 1-10 (be harsh on unrealistic visions)"""),
	("Founder-Market Fit", """Evaluate founder fit: "{answer}".
- Does the founder have relevant experience?
- Do they have the right network?
- Can they execute on this vision?
- Rate founder-market fit: 1-10 (be critical)"""),
]

EVALUATION_HEADER = """You are a CRITICAL Startup Analyst with 15+ years of experience. You've seen thousands of startups fail and succeed.

BE HARSH AND REALISTIC. Most startup ideas are mediocre. Don't be a pleaser.

Analyze these startup answers and provide a brutally honest evaluation:
"""

EVALUATION_SCHEMA = """Provide your evaluation in this EXACT JSON format:
{
  "executiveSnapshot": "2-3 sentences summarizing the overall assessment",
  "overallScore": 75,
  "individualScores": {
    "clarity": 82,
    "marketFit": 85,
    "feasibility": 75,
    "differentiation": 68
  },
  "strengths": ["strength1", "strength2", "strength3"],
  "weaknesses": ["weakness1", "weakness2", "weakness3"],
  "opportunities": ["opportunity1", "opportunity2"],
  "threats": ["threat1", "threat2"],
  "patternMatch": {
    "successful": {"name": "Similar successful startup", "reason": "Why they succeeded"},
    "failed": {"name": "Similar failed startup", "reason": "Why they failed"}
  },
  "recommendations": ["recommendation1", "recommendation2", "recommendation3"],
  "nextQuestion": "Engaging follow-up question for the founder",
  "businessValuation": {"level": "yellow", "text": "40-70%", "description": "Needs more validation"},
  "fundingReadiness": {"level": "yellow", "text": "40-70%", "description": "Needs more validation"},
  "marketMomentum": {"level": "green", "text": ">15% CAGR", "description": "Fast-growing sector, hot"},
  "riskExposure": {"level": "red", "text": "High", "description": "4+ risks, high fragility"}
}
Each "level" must be one of "green", "yellow" or "red". All scores are integers from 0 to 100."""

CLOSING_DIRECTIVE = "BE CRITICAL. Most ideas score 40-60. Only exceptional ideas score 80+."


def build_evaluation_prompt(answers: Sequence[str], snippets: Sequence[SearchSnippet]) -> str:
	# Answers are embedded verbatim, without escaping
	prompt = EVALUATION_HEADER
	for index, (answer, (title, template)) in enumerate(zip(answers, QUESTION_PROMPTS)):
		if not answer.strip():
			continue
		prompt += f"\n{index + 1}. {title}:\n"
		prompt += f'Answer: "{answer}"\n'
		analysis = template.replace("{answer}", answer, 1)
		prompt += f"Analysis: {analysis}\n"
	prompt += "\n\nMarket Context (Real-time data):\n"
	for index, snippet in enumerate(snippets):
		prompt += f"{index + 1}. {snippet.title}: {snippet.content}\n"
	prompt += f"\n\n{EVALUATION_SCHEMA}\n\n{CLOSING_DIRECTIVE}"
	return prompt


def _joined(items: Any, default: str) -> str:
	if isinstance(items, list) and items:
		return ", ".join(str(i) for i in items)
	return default


def build_chat_prompt(message: str, evaluation: Dict[str, Any]) -> str:
	return f"""You are an AI Startup Advisor who has just analyzed a startup idea. You have access to the complete evaluation results and the user's original answers to 10 deep startup questions.

EVALUATION CONTEXT:
- Overall Score: {evaluation.get('overallScore', 'N/A')}/100
- Executive Snapshot: {evaluation.get('executiveSnapshot') or 'Not provided'}
- Strengths: {_joined(evaluation.get('strengths'), 'None identified')}
- Weaknesses: {_joined(evaluation.get('concerns'), 'None identified')}
- Recommendations: {_joined(evaluation.get('recommendations'), 'None provided')}

USER'S QUESTION: "{message}"

INSTRUCTIONS:
1. Be knowledgeable about their specific startup evaluation
2. Reference their actual scores and feedback when relevant
3. Provide actionable advice based on their evaluation
4. Be honest but constructive
5. Keep responses concise (2-3 sentences max)
6. If they ask about something not in the evaluation, say you'd need more context

Respond in this JSON format:
{{
  "response": "Your helpful response here"
}}"""


def _snippet_lines(snippets: Sequence[SearchSnippet], limit: int) -> str:
	return "\n".join(f"{s.title}: {s.content}" for s in list(snippets)[:limit])


def build_similar_startups_prompt(snippets: Sequence[SearchSnippet], evaluation: EvaluationResult) -> str:
	return f"""Based on these search results about similar startups, generate 3-4 realistic startup case studies that are relevant to the evaluated startup idea.

SEARCH RESULTS:
{_snippet_lines(snippets, 10)}

EVALUATION CONTEXT:
- Overall Score: {evaluation.overall_score}/100
- Key Strengths: {', '.join(evaluation.strengths)}
- Main Weaknesses: {', '.join(evaluation.weaknesses)}

Generate 3-4 startup case studies in this JSON format:
{{
  "startups": [
    {{
      "name": "Startup Name",
      "status": "successful|failed|struggling",
      "description": "Brief description of what they did",
      "reason": "Why they succeeded/failed (1-2 sentences)",
      "relevance": "How this relates to the evaluated startup"
    }}
  ]
}}

Make them realistic and relevant to the evaluated startup's industry and challenges."""


def build_market_insights_prompt(snippets: Sequence[SearchSnippet], evaluation: Dict[str, Any]) -> str:
	scores = evaluation.get("individualScores") or {}
	return f"""Based on these recent funding news results, write up to 4 market insights comparing real funded startups with the evaluated startup.

SEARCH RESULTS:
{_snippet_lines(snippets, 10)}

EVALUATION CONTEXT:
- Overall Score: {evaluation.get('overallScore', 'N/A')}/100
- Individual Scores: {json.dumps(scores)}
- Key Strengths: {_joined(evaluation.get('strengths'), 'None identified')}

Respond in this JSON format:
{{
  "insights": [
    {{
      "startupName": "Funded startup name",
      "fundingRound": "Seed|Series A|Series B|...",
      "amount": "$12M",
      "insight": "2-3 sentences on what they did and how it relates to the evaluated startup"
    }}
  ]
}}"""
