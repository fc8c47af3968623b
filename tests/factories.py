from typing import List, Optional

from structs import Contest, RatingChange, Submission, User


def make_submission(sub_id: int, contest_id: Optional[int], index: str, verdict: Optional[str] = "OK",
                    created: int = 1_700_000_000, rating: Optional[int] = None, tags=(),
                    participant: str = "PRACTICE", start: Optional[int] = None) -> Submission:
    problem = {"index": index, "name": f"Problem {index}", "tags": list(tags)}
    if contest_id is not None:
        problem["contestId"] = contest_id
    else:
        problem["problemsetName"] = "acmsguru"
    if rating is not None:
        problem["rating"] = rating
    return Submission.model_validate({
        "id": sub_id,
        "contestId": contest_id,
        "creationTimeSeconds": created,
        "relativeTimeSeconds": 0,
        "problem": problem,
        "author": {
            "members": [{"handle": "tourist"}],
            "participantType": participant,
            "startTimeSeconds": start,
        },
        "verdict": verdict,
    })

def make_contest(contest_id: int, name: str = "Codeforces Round", phase: str = "FINISHED",
                 contest_type: str = "CF", start: Optional[int] = None) -> Contest:
    return Contest(id=contest_id, name=name, type=contest_type, phase=phase,
                   durationSeconds=7200, startTimeSeconds=start)

def make_rating_change(contest_id: int, rank: int, old: int, new: int) -> RatingChange:
    return RatingChange(contestId=contest_id, contestName=f"Round {contest_id}", handle="tourist",
                        rank=rank, ratingUpdateTimeSeconds=1_700_000_000 + contest_id,
                        oldRating=old, newRating=new)


class FakeClient:
    """Stands in for CodeforcesClient; set `error` to make every call fail."""

    def __init__(self, submissions: Optional[List[Submission]] = None, users: Optional[List[User]] = None,
                 history: Optional[List[RatingChange]] = None, error: Optional[Exception] = None):
        self.submissions = submissions or []
        self.users = users if users is not None else [User(handle="tourist", rating=3500, maxRating=3979)]
        self.history = history or []
        self.error = error
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def get_user_submissions(self, handle, from_index=None, count=None):
        self._maybe_fail("user.status")
        return self.submissions

    def get_user_info(self, handles):
        self._maybe_fail("user.info")
        return self.users

    def get_user_rating_history(self, handle):
        self._maybe_fail("user.rating")
        return self.history


