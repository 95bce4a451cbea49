"""
Data-access state store.

AppState holds the four in-memory collections every page reads from, loads
them from the Persistence Service and writes new records through it. One
instance is created per browser session and handed to each page.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypedDict
import asyncio
import logging

from services.persistence import PersistenceError, PersistenceService, Row

logger = logging.getLogger(__name__)


class QuestionRow(TypedDict, total=False):
    id: str
    text: str
    topic: str
    asked_by: str
    hr_entry_id: Optional[str]
    created_at: str


class HREntryRow(TypedDict, total=False):
    id: str
    da_name: str
    company_name: str
    hr_name: str
    hr_contact: str
    created_at: str
    questions: List[QuestionRow]


class AnswerRow(TypedDict, total=False):
    id: str
    question_id: str
    answer_text: str
    answered_by: str
    created_at: str


class JobRow(TypedDict, total=False):
    id: str
    da_name: str
    company_name: str
    phone_number: Optional[str]
    job_link: str
    file_name: Optional[str]
    created_at: str


@dataclass
class FetchResult:
    """Outcome of one collection's reload: data on success, the error otherwise."""

    collection: str
    data: Optional[List[Row]] = None
    error: Optional[PersistenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


JOB_FAILED_MESSAGE = "Failed to add job opening. Please try again."


def attach_questions(entries: List[Row], questions: List[Row]) -> List[HREntryRow]:
    """Give every HR entry the list of questions pointing at it (possibly empty)."""
    grouped: Dict[str, List[Row]] = {}
    for q in questions:
        if q.get("hr_entry_id") is not None:
            grouped.setdefault(q["hr_entry_id"], []).append(q)
    return [{**entry, "questions": grouped.get(entry["id"], [])} for entry in entries]


class AppState:
    def __init__(
        self,
        persistence: PersistenceService,
        notify: Optional[Callable[[str], Any]] = None,
    ):
        self.persistence = persistence
        self.notify = notify
        self.loading = True
        self.hr_entries: List[HREntryRow] = []
        self.questions: List[QuestionRow] = []
        self.answers: List[AnswerRow] = []
        self.jobs: List[JobRow] = []

    # --- Reads ---

    async def fetch_hr_entries(self) -> List[HREntryRow]:
        """HR entries joined with their questions. Errors propagate."""
        entries = await self.persistence.select("hr_entries")
        questions = await self.persistence.select("questions")
        return attach_questions(entries, questions)

    async def _fetch_newest_first(self, table: str) -> FetchResult:
        try:
            rows = await self.persistence.select(table, order_by="created_at", descending=True)
        except PersistenceError as exc:
            logger.error("Error fetching %s: %s", table, exc)
            return FetchResult(table, error=exc)
        return FetchResult(table, data=rows or [])

    async def refresh_data(self) -> Dict[str, FetchResult]:
        """
        Reload all four collections concurrently.

        Questions, answers and jobs are reported per collection; a failed
        one keeps its previous contents. A failure loading HR entries is
        raised after the other collections have been applied.
        """
        self.loading = True
        try:
            hr_result, *results = await asyncio.gather(
                self.fetch_hr_entries(),
                self._fetch_newest_first("questions"),
                self._fetch_newest_first("answers"),
                self._fetch_newest_first("jobs"),
                return_exceptions=True,
            )
            report = {}
            for result in results:
                if isinstance(result, BaseException):
                    raise result
                report[result.collection] = result
                if result.ok:
                    setattr(self, result.collection, result.data)

            if isinstance(hr_result, BaseException):
                logger.error("Error fetching hr_entries: %s", hr_result)
                raise hr_result
            self.hr_entries = hr_result
            report["hr_entries"] = FetchResult("hr_entries", data=hr_result)
            return report
        finally:
            self.loading = False

    # --- Writes ---

    async def _insert_one(self, table: str, row: Row) -> Row:
        inserted = await self.persistence.insert(table, [row])
        if len(inserted) != 1:
            raise PersistenceError(f"Expected one inserted row in '{table}', got {len(inserted)}.")
        return inserted[0]

    async def add_hr_entry(self, entry: Dict[str, Any]) -> HREntryRow:
        """
        Insert an HR entry and one question per text in entry["questions"].

        Question texts are stored as given, empty strings included, with an
        empty topic and asked_by. On success the entry (with its questions)
        is appended to hr_entries and the questions are prepended to
        questions, so no reload is needed.
        """
        hr_data = {k: v for k, v in entry.items() if k != "questions"}
        texts = entry.get("questions") or []
        question_rows = [{"text": t, "topic": "", "asked_by": ""} for t in texts]
        try:
            hr_entry, inserted_questions = await self.persistence.insert_linked(
                "hr_entries", hr_data, "questions", question_rows, "hr_entry_id"
            )
        except PersistenceError as exc:
            logger.error("Error adding HR entry: %s", exc)
            raise

        composed = {**hr_entry, "questions": list(inserted_questions)}
        self.hr_entries = self.hr_entries + [composed]
        # Later rows of the batch are newer.
        self.questions = list(reversed(inserted_questions)) + self.questions
        return composed

    async def add_question(self, question: Dict[str, Any]) -> QuestionRow:
        try:
            row = await self._insert_one("questions", question)
        except PersistenceError as exc:
            logger.error("Error adding question: %s", exc)
            raise
        self.questions = [row] + self.questions
        return row

    async def add_answer(self, answer: Dict[str, Any]) -> AnswerRow:
        try:
            row = await self._insert_one("answers", answer)
        except PersistenceError as exc:
            logger.error("Error adding answer: %s", exc)
            raise
        self.answers = [row] + self.answers
        return row

    async def add_job(self, job: Dict[str, Any]) -> JobRow:
        """Insert a job; missing phone_number and file_name are stored as None."""
        job_to_insert = {
            "da_name": job.get("da_name"),
            "company_name": job.get("company_name"),
            "job_link": job.get("job_link"),
            "phone_number": job.get("phone_number"),
            "file_name": job.get("file_name"),
        }
        try:
            row = await self._insert_one("jobs", job_to_insert)
        except PersistenceError as exc:
            logger.error("Error adding job: %s", exc)
            if self.notify is not None:
                self.notify(JOB_FAILED_MESSAGE)
            raise
        self.jobs = [row] + self.jobs
        return row
