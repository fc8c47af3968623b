import json
import logging
import sys
import threading
from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

import config
from errors import CodeforcesError, UpstreamError
from gateway import ApiGateway
from ranks import get_rank_from_rating, get_rating_color
from structs import Contest, RatingChange, Standings, Submission, User
from utils import build_endpoint, encode_handles, load_users

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse(model: Type[T], payload: Any, endpoint: str) -> T:
    try:
        return TypeAdapter(model).validate_python(payload)
    except ValidationError as e:
        raise UpstreamError(f"Unexpected {endpoint} payload: {e}") from e


class CodeforcesClient:
    """Typed accessors for the handful of Codeforces endpoints we read."""

    def __init__(self, gateway: Optional[ApiGateway] = None):
        self.gateway = gateway or ApiGateway()

    def get_contests(self, gym: bool = False) -> List[Contest]:
        endpoint = build_endpoint("contest.list", gym="true" if gym else None)
        return _parse(List[Contest], self.gateway.call(endpoint), "contest.list")

    def get_user_submissions(self, handle: str, from_index: Optional[int] = None,
                             count: Optional[int] = None) -> List[Submission]:
        endpoint = build_endpoint("user.status", handle=encode_handles([handle]),
                                  **{"from": from_index, "count": count})
        return _parse(List[Submission], self.gateway.call(endpoint), "user.status")

    def get_user_info(self, handles: Iterable[str]) -> List[User]:
        endpoint = build_endpoint("user.info", handles=encode_handles(handles))
        return _parse(List[User], self.gateway.call(endpoint), "user.info")

    def get_user_rating_history(self, handle: str) -> List[RatingChange]:
        endpoint = build_endpoint("user.rating", handle=encode_handles([handle]))
        return _parse(List[RatingChange], self.gateway.call(endpoint), "user.rating")

    def get_contest_standings(self, contest_id: int, handles: Optional[Iterable[str]] = None,
                              from_index: Optional[int] = None, count: Optional[int] = None,
                              show_unofficial: bool = False) -> Standings:
        handles = list(handles or [])
        endpoint = build_endpoint(
            "contest.standings",
            contestId=contest_id,
            handles=encode_handles(handles) if handles else None,
            **{"from": from_index, "count": count},
            showUnofficial="true" if show_unofficial else None,
        )
        return _parse(Standings, self.gateway.call(endpoint), "contest.standings")


_default_client: Optional[CodeforcesClient] = None
_client_lock = threading.Lock()

def default_client() -> CodeforcesClient:
    global _default_client
    with _client_lock:
        if _default_client is None:
            _default_client = CodeforcesClient()
        return _default_client


def collect(handle: str, client: Optional[CodeforcesClient] = None) -> dict:
    # local imports: the aggregation modules import this one
    from heatmap import get_submission_heatmap_data, heatmap_stats
    from process import (get_problem_statistics, get_user_contest_stats, get_user_summary,
                         get_virtual_contest_submissions)

    client = client or default_client()
    summary = get_user_summary(handle, client=client)
    print(f"Found {summary.solved_contests_count} solved contests for {handle}")

    heatmap = get_submission_heatmap_data(handle, client=client)
    print(f"Found {len(heatmap)} active days in the last year for {handle}")

    virtual = get_virtual_contest_submissions(handle, client=client)
    print(f"Found {len(virtual)} virtual contests for {handle}")

    return {
        "handle": handle,
        "summary": summary.model_dump(mode="json"),
        "rank": get_rank_from_rating(summary.user.rating),
        "color": get_rating_color(summary.user.rating),
        "contest_stats": get_user_contest_stats(handle, client=client).model_dump(mode="json"),
        "problem_stats": get_problem_statistics(handle, client=client).model_dump(mode="json"),
        "heatmap": heatmap,
        "heatmap_stats": heatmap_stats(heatmap).model_dump(mode="json"),
        "virtual_contests": [v.model_dump(mode="json") for v in virtual],
    }


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=config.LOG_LEVEL,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    user_file = argv[0] if argv else config.USER_FILE
    _, handles = load_users(user_file)
    print(f"Fetching data for {len(handles)} handles")

    client = default_client()
    report = []
    for handle in handles:
        try:
            report.append(collect(handle, client=client))
        except CodeforcesError as e:
            logger.error("Skipping %s: %s", handle, e)
    with open(config.OUTPUT_FILE, "w") as f:
        json.dump(report, f, indent=4)
    print(f"Wrote {len(report)} reports to {config.OUTPUT_FILE}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
