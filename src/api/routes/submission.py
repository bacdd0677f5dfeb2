"""API routes for the submission list."""

from litestar import Controller, get
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK

from api.dependencies import provide_contest_session
from api.schemas.submission import SubmissionResponse
from services import ContestSession


class SubmissionController(Controller):
    """Controller for the contestant's own submissions."""

    path = "/submissions"
    dependencies = {"contest_session": Provide(provide_contest_session, sync_to_thread=False)}

    @get("/", status_code=HTTP_200_OK)
    async def list_submissions(
        self, contest_session: ContestSession, refresh: bool = False
    ) -> list[SubmissionResponse]:
        submissions = await contest_session.get_submissions(no_cache=refresh)
        return [SubmissionResponse.model_validate(item) for item in submissions]
