from api.routes.contest import ContestController, RankController
from api.routes.problem import ProblemController
from api.routes.submission import SubmissionController
from api.routes.workspace import WorkspaceController

__all__ = [
    "ContestController",
    "ProblemController",
    "RankController",
    "SubmissionController",
    "WorkspaceController",
]
