"""
Survey Catalog Repository - Career Compass
career_compass/repositories/survey_repository.py

Read-only access to instrument models and their questions.
"""

from typing import Dict, Iterable, List, Optional

from career_compass.models.enumerations import QuestionType
from career_compass.models.survey import InstrumentModel, Question, QuestionOption
from career_compass.repositories.base import BaseRepository

QUESTION_COLUMNS = "ID, MODEL_ID, QUESTION_CODE, CONTENT, TYPE, OPTIONS, SORT_ORDER"


class SurveyRepository(BaseRepository):
    """Repository for the survey catalog."""

    def list_models(self) -> List[InstrumentModel]:
        rows = self.execute_query(
            "SELECT ID, CODE, NAME, DESCRIPTION FROM SURVEY_MODELS ORDER BY CODE",
            fetch_all=True,
        )
        return [self._row_to_model(r) for r in rows or []]

    def get_models_by_codes(self, codes: Iterable[str]) -> Dict[str, InstrumentModel]:
        """
        Fetch instrument models by code.

        Returns:
            Mapping of model code to model; unknown codes are absent.
        """
        codes = list(codes)
        if not codes:
            return {}
        placeholders = ", ".join(["%s"] * len(codes))
        rows = self.execute_query(
            f"SELECT ID, CODE, NAME, DESCRIPTION FROM SURVEY_MODELS WHERE CODE IN ({placeholders})",
            tuple(codes),
            fetch_all=True,
        )
        models = [self._row_to_model(r) for r in rows or []]
        return {m.code: m for m in models}

    def get_model_by_code(self, code: str) -> Optional[InstrumentModel]:
        return self.get_models_by_codes([code]).get(code)

    def get_questions_for_models(self, model_ids: Iterable[str]) -> List[Question]:
        model_ids = list(model_ids)
        if not model_ids:
            return []
        placeholders = ", ".join(["%s"] * len(model_ids))
        rows = self.execute_query(
            f"""
            SELECT {QUESTION_COLUMNS}
            FROM SURVEY_QUESTIONS
            WHERE MODEL_ID IN ({placeholders})
            ORDER BY MODEL_ID, SORT_ORDER, QUESTION_CODE
            """,
            tuple(model_ids),
            fetch_all=True,
        )
        return [self._row_to_question(r) for r in rows or []]

    def get_questions_by_ids(self, question_ids: Iterable[str]) -> Dict[str, Question]:
        question_ids = list(dict.fromkeys(question_ids))
        if not question_ids:
            return {}
        placeholders = ", ".join(["%s"] * len(question_ids))
        rows = self.execute_query(
            f"SELECT {QUESTION_COLUMNS} FROM SURVEY_QUESTIONS WHERE ID IN ({placeholders})",
            tuple(question_ids),
            fetch_all=True,
        )
        questions = [self._row_to_question(r) for r in rows or []]
        return {q.id: q for q in questions}

    def _row_to_model(self, row: Dict) -> InstrumentModel:
        data = self.row_to_dict(row)
        return InstrumentModel(
            id=str(data["id"]),
            code=data["code"],
            name=data["name"],
            description=data.get("description"),
        )

    def _row_to_question(self, row: Dict) -> Question:
        data = self.row_to_dict(row)
        options = self.parse_variant(data.get("options"), default=[])
        return Question(
            id=str(data["id"]),
            model_id=str(data["model_id"]),
            code=data["question_code"],
            type=QuestionType(data["type"]),
            content=data["content"],
            options=[QuestionOption(code=str(o["code"]), label=o["label"]) for o in options],
            sort_order=data.get("sort_order") or 0,
        )
