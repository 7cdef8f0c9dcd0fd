"""
Prompt Builder - Career Compass
career_compass/scoring/prompt_builder.py

Turns an AnalysisContext into the system and user messages sent to the model.
Answers are rendered with the literal question text and the chosen option
labels; raw option codes never reach the prompt.
"""

from typing import List

from career_compass.models.enumerations import Instrument
from career_compass.scoring.career_reflection import describe_answer
from career_compass.scoring.context import AnalysisContext

SYSTEM_PROMPT = (
    "You are a senior career-planning consultant and organizational psychologist. "
    "You interpret psychometric results (MBTI, Big Five, DISC, Holland RIASEC and work "
    "values) together with a person's background, and you give specific, practical and "
    "encouraging career guidance. Always answer with a single JSON object."
)

INSTRUMENT_TITLES = {
    Instrument.FIVE_QUESTIONS: "Career reflection (five questions)",
    Instrument.MBTI: "MBTI personality",
    Instrument.BIG_FIVE: "Big Five personality traits",
    Instrument.DISC: "DISC behavioral style",
    Instrument.HOLLAND: "Holland career interests",
    Instrument.VALUES: "Work values",
}

RESPONSE_SCHEMA = """{
  "summary": "3-5 sentence overview of the person's profile and direction",
  "detailed_analysis": {
    "personal_profile": {},
    "test_results": {},
    "career_recommendations": [],
    "development_suggestions": [],
    "cultural_fit": {},
    "strengths_and_weaknesses": {"strengths": [], "improvement_areas": [], "action_plan": []}
  },
  "recommendations": ["5 to 7 concrete, actionable recommendations"],
  "confidence_score": 0.0
}"""

MAX_KNOWLEDGE_CHARS = 600


class PromptBuilder:

    def system_message(self) -> str:
        return SYSTEM_PROMPT

    def user_message(self, context: AnalysisContext) -> str:
        sections = [
            self.profile_section(context),
            self.answers_section(context),
            self.knowledge_section(context),
            self.instructions_section(),
        ]
        return "\n\n".join(s for s in sections if s)

    def profile_section(self, context: AnalysisContext) -> str:
        p = context.submission.profile
        return "\n".join([
            "## Personal profile",
            f"- Name: {p.name}",
            f"- Gender: {p.gender}",
            f"- Age: {p.age}",
            f"- City: {p.city}",
            f"- Occupation: {p.occupation}",
            f"- Education: {p.education}",
        ])

    def answers_section(self, context: AnalysisContext) -> str:
        lines: List[str] = ["## Assessment answers"]
        for instrument in context.instruments:
            answers = context.answers_for(instrument)
            if not answers:
                continue
            lines.append(f"### {INSTRUMENT_TITLES[instrument]}")
            for index, answer in enumerate(answers, start=1):
                lines.append(f"{index}. {answer.question.content}")
                lines.append(f"   Answer: {describe_answer(answer)}")
        return "\n".join(lines)

    def knowledge_section(self, context: AnalysisContext) -> str:
        if not context.knowledge:
            return ""
        lines = ["## Reference knowledge"]
        for index, entry in enumerate(context.knowledge, start=1):
            content = entry.content
            if len(content) > MAX_KNOWLEDGE_CHARS:
                content = content[:MAX_KNOWLEDGE_CHARS] + "..."
            lines.append(f"{index}. {entry.title} [{entry.model_tag}]")
            lines.append(f"   {content}")
        return "\n".join(lines)

    def instructions_section(self) -> str:
        return (
            "## Task\n"
            "Using the profile, the answers and the reference knowledge above, write a "
            "personalized career and personality analysis. Respond with JSON only, "
            "matching this structure:\n"
            f"{RESPONSE_SCHEMA}\n"
            "confidence_score is your confidence in the analysis between 0 and 1."
        )
