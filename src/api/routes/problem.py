"""API routes for contest problems and judging."""

from litestar import Controller, get, post
from litestar.di import Provide
from litestar.exceptions import ValidationException
from litestar.status_codes import HTTP_200_OK, HTTP_201_CREATED
from loguru import logger

from api.dependencies import provide_contest_session
from api.schemas.problem import (
    CodeFileRequest,
    CodeFileResponse,
    ExampleResponse,
    ProblemDetailResponse,
    ProblemSummaryResponse,
)
from api.schemas.submission import JudgeOutcomeResponse, SubmitRequest
from domain.exceptions import ProblemNotFoundError
from domain.models import Compiler, Problem
from domain.models.compiler import find_compiler
from services import (
    ContestSession,
    CphService,
    create_code_file,
    render_problem_document,
    write_problem_document,
)


def _summary_fields(problem: Problem) -> dict:
    info = problem.info
    return {
        "index": info.index,
        "title": info.title,
        "problem_id": info.problem_id,
        "score": info.score,
        "accepted_count": info.accepted_count,
        "submit_count": info.submit_count,
        "accepted_rate": info.accepted_rate,
        "my_status": info.my_status,
        "has_details": problem.has_details,
    }


def _resolve_compiler(name: str) -> Compiler:
    compiler = find_compiler(name)
    if compiler is None:
        raise ValidationException(detail=f"Unknown compiler: {name}")
    return compiler


async def _get_problem(contest_session: ContestSession, index: str) -> Problem:
    problem = await contest_session.get_problem(index)
    if problem is None:
        raise ProblemNotFoundError(index)
    return problem


class ProblemController(Controller):
    """Controller for problem-related endpoints."""

    path = "/problems"
    dependencies = {"contest_session": Provide(provide_contest_session, sync_to_thread=False)}

    @get("/", status_code=HTTP_200_OK)
    async def list_problems(
        self, contest_session: ContestSession, refresh: bool = False
    ) -> list[ProblemSummaryResponse]:
        """
        List the contest's problems.

        Query parameters:
        - refresh: refetch the list from the judge (details already fetched are kept)
        """
        problems = await contest_session.get_problems(no_cache=refresh)
        return [ProblemSummaryResponse(**_summary_fields(problem)) for problem in problems]

    @get("/{index:str}", status_code=HTTP_200_OK)
    async def get_problem(
        self, contest_session: ContestSession, index: str, refresh: bool = False
    ) -> ProblemDetailResponse:
        """
        Get a problem's statement, examples and Markdown document.

        The problem page is fetched on first access (or with `refresh`) and
        persisted in the workspace config.
        """
        logger.debug(f"API request for problem {index} of contest {contest_session.contest_id}")
        problem = await _get_problem(contest_session, index)
        extra = await contest_session.get_problem_extra(index, no_cache=refresh)
        return ProblemDetailResponse(
            **_summary_fields(problem),
            content=extra.content,
            examples=[ExampleResponse.model_validate(example) for example in extra.examples],
            is_submittable=extra.is_submittable,
            document=render_problem_document(problem),
        )

    @post("/{index:str}/code", status_code=HTTP_201_CREATED)
    async def create_code(
        self, contest_session: ContestSession, index: str, data: CodeFileRequest
    ) -> CodeFileResponse:
        """Write the problem document and a starter code file (plus cph tests) into the workspace."""
        compiler = _resolve_compiler(data.compiler)
        problem = await _get_problem(contest_session, index)
        await contest_session.get_problem_extra(index)

        document_path = write_problem_document(contest_session.folder, problem)
        code_path = create_code_file(contest_session.folder, problem, compiler)
        prob_path = None
        if data.with_cph:
            cph = CphService(contest_session.folder)
            cph.ensure(code_path.name, problem)
            prob_path = str(cph.prob_path(code_path.name))

        return CodeFileResponse(
            path=str(code_path), prob_path=prob_path, document_path=str(document_path)
        )

    @post("/{index:str}/submit", status_code=HTTP_200_OK)
    async def submit(
        self, contest_session: ContestSession, index: str, data: SubmitRequest
    ) -> JudgeOutcomeResponse:
        """
        Submit a solution and wait for the verdict.

        A verdict that does not arrive within the polling bound is reported
        with `verdict == "timeout"`.
        """
        compiler = _resolve_compiler(data.compiler) if data.compiler else None
        logger.debug(f"API request to submit problem {index} of contest {contest_session.contest_id}")
        outcome = await contest_session.submit_and_judge(
            data.code, index, compiler=compiler, language_id=data.language_id
        )
        status = outcome.status
        return JudgeOutcomeResponse(
            submission_id=outcome.submission_id,
            verdict=outcome.kind.value,
            accepted=outcome.accepted,
            polls=outcome.polls,
            message=outcome.message,
            status=status.status if status else None,
            time_consumption=status.time_consumption if status else None,
            memory_consumption=status.memory_consumption if status else None,
        )
