# tests/conftest.py

"""
Pytest Fixtures - shared fakes, catalog and payloads for services and APIs.

The repositories are replaced by in-memory fakes with the same method
signatures, so no Snowflake or Redis connection is needed.

CATALOG REFERENCE (question codes per instrument):
- fiveQuestions: fq_goal (text), fq_env (single A/B/C), fq_priorities (sorting, 3 options)
- mbti:          mbti_1 .. mbti_8 (scale)
- bigFive:       big5_o_1, big5_c_1, big5_e_1, big5_a_1, big5_n_1 (scale)
- disc:          disc_d_1, disc_i_1, disc_s_1, disc_c_1 (scale)
- holland:       holland_r_1, holland_i_1, holland_a_1, holland_s_1, holland_e_1, holland_c_1 (scale)
- values:        values_1, values_2 (multiple, options "1".."10")
"""

import asyncio
import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Dict, Iterable, List, Optional, Sequence

# Settings are read at import time; point them at dummy values first.
os.environ.setdefault("SNOWFLAKE_ACCOUNT", "test-account")
os.environ.setdefault("SNOWFLAKE_USER", "test-user")
os.environ.setdefault("SNOWFLAKE_PASSWORD", "test-password")
os.environ.setdefault("SNOWFLAKE_DATABASE", "CAREER_COMPASS")
os.environ.setdefault("SNOWFLAKE_SCHEMA", "PUBLIC")
os.environ.setdefault("SNOWFLAKE_WAREHOUSE", "COMPUTE_WH")
os.environ.setdefault("SNOWFLAKE_ROLE", "SYSADMIN")
os.environ["ANALYSIS_WORKER_ENABLED"] = "false"
os.environ.pop("OPENAI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient

from career_compass.core import dependencies
from career_compass.core.exceptions import RepositoryException
from career_compass.main import app
from career_compass.models.analysis import AnalysisJob, AnalysisResult
from career_compass.models.enumerations import JobStatus, QuestionType
from career_compass.models.knowledge import KnowledgeEntry
from career_compass.models.submission import Answer, Profile, Submission
from career_compass.models.survey import InstrumentModel, Question, QuestionOption
from career_compass.scoring.rule_strategy import RuleBasedAnalysisStrategy
from career_compass.services.analysis_orchestrator import AnalysisOrchestrator
from career_compass.services.analysis_worker import AnalysisWorker
from career_compass.services.answer_intake import AnswerIntakeService
from career_compass.services.knowledge_retriever import KnowledgeRetriever
from career_compass.services.result_poller import ResultPoller
from career_compass.services.status_reporter import StatusReporter
from career_compass.services.survey_catalog import SurveyCatalog


# =============================================================================
# CATALOG
# =============================================================================

def _options(*labels: str) -> List[QuestionOption]:
    return [QuestionOption(code=chr(ord("A") + i), label=label) for i, label in enumerate(labels)]


def _numbered_options(count: int) -> List[QuestionOption]:
    return [QuestionOption(code=str(i), label=f"Value {i}") for i in range(1, count + 1)]


def build_catalog():
    models = [
        InstrumentModel(id="m-fiveq", code="fiveq", name="Career Reflection"),
        InstrumentModel(id="m-mbti", code="mbti", name="MBTI"),
        InstrumentModel(id="m-big5", code="big5", name="Big Five"),
        InstrumentModel(id="m-disc", code="disc", name="DISC"),
        InstrumentModel(id="m-holland", code="holland", name="Holland RIASEC"),
        InstrumentModel(id="m-motivation", code="motivation", name="Work Values"),
    ]
    questions: List[Question] = [
        Question(id="q-fq-goal", model_id="m-fiveq", code="fq_goal", type=QuestionType.TEXT,
                 content="What kind of work would you like to do in five years?", sort_order=1),
        Question(id="q-fq-env", model_id="m-fiveq", code="fq_env", type=QuestionType.SINGLE,
                 content="Which work environment suits you best?",
                 options=_options("Fast-paced startup", "Large enterprise", "Public sector"),
                 sort_order=2),
        Question(id="q-fq-priorities", model_id="m-fiveq", code="fq_priorities",
                 type=QuestionType.SORTING, content="Rank what matters most in a job",
                 options=_options("Salary", "Growth", "Balance"), sort_order=3),
    ]
    for i in range(1, 9):
        questions.append(Question(
            id=f"q-mbti-{i}", model_id="m-mbti", code=f"mbti_{i}", type=QuestionType.SCALE,
            content=f"MBTI statement {i}", sort_order=i))
    for i, trait in enumerate("ocean", start=1):
        questions.append(Question(
            id=f"q-big5-{trait}", model_id="m-big5", code=f"big5_{trait}_1", type=QuestionType.SCALE,
            content=f"Big Five statement ({trait})", sort_order=i))
    for i, style in enumerate("disc", start=1):
        questions.append(Question(
            id=f"q-disc-{style}", model_id="m-disc", code=f"disc_{style}_1", type=QuestionType.SCALE,
            content=f"DISC statement ({style})", sort_order=i))
    for i, letter in enumerate("riasec", start=1):
        questions.append(Question(
            id=f"q-holland-{letter}", model_id="m-holland", code=f"holland_{letter}_1",
            type=QuestionType.SCALE, content=f"Holland statement ({letter})", sort_order=i))
    for i in range(1, 3):
        questions.append(Question(
            id=f"q-values-{i}", model_id="m-motivation", code=f"values_{i}",
            type=QuestionType.MULTIPLE, content=f"Pick the values that matter to you ({i})",
            options=_numbered_options(10), sort_order=i))
    return models, questions


def build_knowledge(count: int = 12) -> List[KnowledgeEntry]:
    tags = ["career_development", "personality", "personality_traits",
            "behavior_style", "career_interests", "work_values"]
    entries = []
    for i in range(count):
        tag = tags[i % len(tags)]
        entries.append(KnowledgeEntry(
            id=f"kb-{i + 1}",
            title=f"{tag.replace('_', ' ').title()} guide {i + 1}",
            content=f"Reference material about {tag}.",
            model_tag=tag,
            category="guide",
        ))
    entries.append(KnowledgeEntry(
        id="kb-culture",
        title="Company culture and values fit",
        content="How organizational culture shapes long-term satisfaction.",
        model_tag="work_values",
        category="culture",
    ))
    return entries


# =============================================================================
# IN-MEMORY REPOSITORIES
# =============================================================================

class FakeSurveyRepository:

    def __init__(self, models: List[InstrumentModel], questions: List[Question]):
        self.models = models
        self.questions = questions
        self.ping_error: Optional[Exception] = None

    def list_models(self) -> List[InstrumentModel]:
        return sorted(self.models, key=lambda m: m.code)

    def get_models_by_codes(self, codes: Iterable[str]) -> Dict[str, InstrumentModel]:
        wanted = set(codes)
        return {m.code: m for m in self.models if m.code in wanted}

    def get_model_by_code(self, code: str) -> Optional[InstrumentModel]:
        return self.get_models_by_codes([code]).get(code)

    def get_questions_for_models(self, model_ids: Iterable[str]) -> List[Question]:
        wanted = set(model_ids)
        return sorted(
            (q for q in self.questions if q.model_id in wanted),
            key=lambda q: (q.model_id, q.sort_order, q.code),
        )

    def get_questions_by_ids(self, question_ids: Iterable[str]) -> Dict[str, Question]:
        wanted = set(question_ids)
        return {q.id: q for q in self.questions if q.id in wanted}

    def ping(self) -> bool:
        if self.ping_error is not None:
            raise self.ping_error
        return True


class FakeAnalysisJobRepository:

    def __init__(self):
        self.jobs: Dict[str, AnalysisJob] = {}

    def add_pending(self, submission_id: str, created_at: datetime) -> None:
        self.jobs[submission_id] = AnalysisJob(submission_id=submission_id, created_at=created_at)

    def _claimable(self, job: AnalysisJob, stale_before: datetime) -> bool:
        if job.status == JobStatus.PENDING:
            return True
        return (
            job.status == JobStatus.PROCESSING
            and job.claimed_at is not None
            and job.claimed_at < stale_before
        )

    def claim(self, submission_id: str, stale_before: datetime) -> bool:
        job = self.jobs.get(submission_id)
        if job is None or not self._claimable(job, stale_before):
            return False
        job.status = JobStatus.PROCESSING
        job.attempts += 1
        job.claimed_at = datetime.now(timezone.utc)
        return True

    def list_claimable(self, stale_before: datetime, limit: int) -> List[str]:
        jobs = sorted(self.jobs.values(), key=lambda j: j.created_at)
        return [j.submission_id for j in jobs if self._claimable(j, stale_before)][:limit]

    def mark_completed(self, submission_id: str) -> None:
        job = self.jobs[submission_id]
        job.status = JobStatus.COMPLETED
        job.completed_at = datetime.now(timezone.utc)
        job.last_error = None

    def mark_failed(self, submission_id: str, error: str) -> None:
        job = self.jobs[submission_id]
        job.status = JobStatus.FAILED
        job.completed_at = datetime.now(timezone.utc)
        job.last_error = error

    def get(self, submission_id: str) -> Optional[AnalysisJob]:
        return self.jobs.get(submission_id)


class FakeSubmissionRepository:
    """Stores the submission, its answers and its outbox marker together."""

    def __init__(self, jobs: FakeAnalysisJobRepository):
        self.jobs = jobs
        self.submissions: Dict[str, Submission] = {}
        self.answers: Dict[str, List[Answer]] = {}
        self.create_error: Optional[Exception] = None

    def create(self, submission: Submission, answers: List[Answer]) -> Submission:
        if self.create_error is not None:
            raise self.create_error
        self.submissions[submission.id] = submission
        self.answers[submission.id] = list(answers)
        self.jobs.add_pending(submission.id, submission.submitted_at)
        return submission

    def get_by_id(self, submission_id: str) -> Optional[Submission]:
        return self.submissions.get(submission_id)

    def get_answers(self, submission_id: str) -> List[Answer]:
        return list(self.answers.get(submission_id, []))

    def backdate(self, submission_id: str, minutes: float) -> None:
        submission = self.submissions[submission_id]
        self.submissions[submission_id] = submission.model_copy(
            update={"submitted_at": submission.submitted_at - timedelta(minutes=minutes)})


class FakeKnowledgeRepository:

    def __init__(self, entries: List[KnowledgeEntry]):
        self.entries = entries
        self.error: Optional[Exception] = None
        self.tag_calls: List[str] = []
        self.search_calls: List[Sequence[str]] = []

    def get_by_model_tag(self, model_tag: str) -> List[KnowledgeEntry]:
        if self.error is not None:
            raise self.error
        self.tag_calls.append(model_tag)
        return [e for e in self.entries if e.model_tag == model_tag]

    def search(self, terms: Sequence[str], limit: int = 10) -> List[KnowledgeEntry]:
        if self.error is not None:
            raise self.error
        self.search_calls.append(tuple(terms))
        matches = [
            e for e in self.entries
            if any(t in f"{e.title} {e.content}".lower() for t in terms)
        ]
        return matches[:limit]


class FakeAnalysisResultRepository:

    def __init__(self):
        self.results: Dict[str, AnalysisResult] = {}
        self.insert_error: Optional[Exception] = None
        self.insert_calls = 0

    def insert_if_absent(self, result: AnalysisResult) -> bool:
        self.insert_calls += 1
        if self.insert_error is not None:
            raise self.insert_error
        if result.submission_id in self.results:
            return False
        self.results[result.submission_id] = result
        return True

    def get_by_submission_id(self, submission_id: str) -> Optional[AnalysisResult]:
        return self.results.get(submission_id)

    def get_by_id(self, analysis_id: str) -> Optional[AnalysisResult]:
        for result in self.results.values():
            if result.id == analysis_id:
                return result
        return None


class RecordingScheduler:
    """Records scheduled submissions instead of starting background tasks."""

    def __init__(self):
        self.scheduled: List[str] = []

    def schedule(self, submission_id: str) -> None:
        self.scheduled.append(submission_id)


# =============================================================================
# WIRED SERVICES
# =============================================================================

class Harness:
    """Every service built on the in-memory repositories, without an AI client."""

    def __init__(self, knowledge_count: int = 12):
        models, questions = build_catalog()
        self.survey = FakeSurveyRepository(models, questions)
        self.jobs = FakeAnalysisJobRepository()
        self.submissions = FakeSubmissionRepository(self.jobs)
        self.knowledge = FakeKnowledgeRepository(build_knowledge(knowledge_count))
        self.results = FakeAnalysisResultRepository()
        self.scheduler = RecordingScheduler()

        self.retriever = KnowledgeRetriever(self.knowledge, search_limit=10)
        self.rule_strategy = RuleBasedAnalysisStrategy()
        self.orchestrator = self.build_orchestrator()
        self.worker = AnalysisWorker(self.orchestrator, self.jobs, poll_interval_seconds=0.1)
        self.intake = AnswerIntakeService(self.survey, self.submissions, self.scheduler)
        self.poller = ResultPoller(self.results, self.submissions)
        self.catalog = SurveyCatalog(self.survey)
        self.status_reporter = StatusReporter(client=None, model="gpt-4o-mini", database=self.survey)

    def build_orchestrator(self, ai_strategy=None, ai_timeout_seconds: float = 60.0) -> AnalysisOrchestrator:
        return AnalysisOrchestrator(
            submission_repository=self.submissions,
            survey_repository=self.survey,
            result_repository=self.results,
            retriever=self.retriever,
            rule_strategy=self.rule_strategy,
            ai_strategy=ai_strategy,
            ai_timeout_seconds=ai_timeout_seconds,
        )

    def submit(self, payload: dict) -> str:
        """Store a submission through the intake service; returns its id."""
        from career_compass.models.submission import SubmissionCreate
        receipt = asyncio.run(self.intake.submit(SubmissionCreate.model_validate(payload)))
        return receipt.submission_id

    def overrides(self):
        return {
            dependencies.get_answer_intake_service: lambda: self.intake,
            dependencies.get_result_poller: lambda: self.poller,
            dependencies.get_survey_catalog: lambda: self.catalog,
            dependencies.get_status_reporter: lambda: self.status_reporter,
        }


@pytest.fixture
def harness():
    return Harness()


# =============================================================================
# PAYLOADS
# =============================================================================

@pytest.fixture
def sample_profile():
    return {
        "name": "Lin Chen",
        "gender": "female",
        "age": 29,
        "city": "Shanghai",
        "occupation": "Software Engineer",
        "education": "Bachelor",
    }


@pytest.fixture
def full_payload(sample_profile):
    """Profile plus all six instruments; fq_priorities is left unanswered."""
    return {
        "profile": sample_profile,
        "fiveQuestions": {"fq_goal": "Lead a data platform team", "fq_env": "A"},
        "mbti": {f"mbti_{i}": v for i, v in enumerate([2, 4, 1, 5, 1, 5, 2, 4], start=1)},
        "bigFive": {"big5_o_1": 5, "big5_c_1": 4, "big5_e_1": 2, "big5_a_1": 3, "big5_n_1": 1},
        "disc": {"disc_d_1": 2, "disc_i_1": 1, "disc_s_1": 4, "disc_c_1": 5},
        "holland": {"holland_r_1": 2, "holland_i_1": 5, "holland_a_1": 4,
                    "holland_s_1": 1, "holland_e_1": 3, "holland_c_1": 2},
        "values": {"values_1": ["1", "7"], "values_2": ["8"]},
    }


def make_profile(**overrides) -> Profile:
    data = {
        "name": "Lin Chen", "gender": "female", "age": 29, "city": "Shanghai",
        "occupation": "Software Engineer", "education": "Bachelor",
    }
    data.update(overrides)
    return Profile(**data)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(harness):
    """TestClient wired to the harness services."""
    app.dependency_overrides.update(harness.overrides())
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# FAKE AI CLIENT
# =============================================================================

class FakeCompletions:

    def __init__(self, content: Optional[str] = None, delay: float = 0.0,
                 error: Optional[Exception] = None):
        self.content = content
        self.delay = delay
        self.error = error
        self.calls: List[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeModels:

    def __init__(self, delay: float = 0.0, error: Optional[Exception] = None):
        self.delay = delay
        self.error = error

    async def list(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(id="gpt-4o-mini")])


class FakeAIClient:
    """Stands in for AsyncOpenAI: chat.completions.create and models.list."""

    def __init__(self, content: Optional[str] = None, delay: float = 0.0,
                 error: Optional[Exception] = None, models: Optional[FakeModels] = None):
        self.chat = SimpleNamespace(completions=FakeCompletions(content, delay, error))
        self.models = models or FakeModels()

    @property
    def calls(self) -> List[dict]:
        return self.chat.completions.calls
