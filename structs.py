from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, computed_field

import config

ContestType = Literal["CF", "IOI", "ICPC"]
ContestPhase = Literal["BEFORE", "CODING", "PENDING_SYSTEM_TEST", "SYSTEM_TEST", "FINISHED"]
ParticipantType = Literal["CONTESTANT", "PRACTICE", "VIRTUAL", "MANAGER", "OUT_OF_COMPETITION"]


# Upstream shapes, field names as Codeforces sends them

class ApiEnvelope(BaseModel):
    status: Literal["OK", "FAILED"]
    result: Any = None
    comment: Optional[str] = None

class Contest(BaseModel):
    id: int
    name: str
    type: ContestType
    phase: ContestPhase
    frozen: bool = False
    durationSeconds: int
    startTimeSeconds: Optional[int] = None
    relativeTimeSeconds: Optional[int] = None

class Problem(BaseModel):
    contestId: Optional[int] = None
    problemsetName: Optional[str] = None
    index: str
    name: str = ""
    rating: Optional[int] = None
    tags: List[str] = Field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.contestId or 'problemset'}-{self.index}"

class Member(BaseModel):
    handle: str
    name: Optional[str] = None

class Author(BaseModel):
    contestId: Optional[int] = None
    members: List[Member] = Field(default_factory=list)
    participantType: ParticipantType
    ghost: bool = False
    startTimeSeconds: Optional[int] = None

class Submission(BaseModel):
    id: int
    contestId: Optional[int] = None
    creationTimeSeconds: int
    relativeTimeSeconds: int = 0
    problem: Problem
    author: Author
    programmingLanguage: Optional[str] = None
    verdict: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.verdict == "OK"

class User(BaseModel):
    handle: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    country: Optional[str] = None
    organization: Optional[str] = None
    contribution: int = 0
    rank: Optional[str] = None
    rating: Optional[int] = None
    maxRank: Optional[str] = None
    maxRating: Optional[int] = None
    lastOnlineTimeSeconds: Optional[int] = None
    registrationTimeSeconds: Optional[int] = None
    friendOfCount: int = 0
    avatar: Optional[str] = None
    titlePhoto: Optional[str] = None

class RatingChange(BaseModel):
    contestId: int
    contestName: str
    handle: str
    rank: int
    ratingUpdateTimeSeconds: int
    oldRating: int
    newRating: int

class Party(BaseModel):
    contestId: Optional[int] = None
    members: List[Member] = Field(default_factory=list)
    participantType: ParticipantType
    ghost: bool = False
    startTimeSeconds: Optional[int] = None

class ProblemResult(BaseModel):
    points: float = 0
    penalty: Optional[int] = None
    rejectedAttemptCount: int = 0
    type: Literal["PRELIMINARY", "FINAL"] = "FINAL"
    bestSubmissionTimeSeconds: Optional[int] = None

class RanklistRow(BaseModel):
    party: Party
    rank: int
    points: float = 0
    penalty: int = 0
    successfulHackCount: int = 0
    unsuccessfulHackCount: int = 0
    problemResults: List[ProblemResult] = Field(default_factory=list)

class Standings(BaseModel):
    contest: Contest
    problems: List[Problem] = Field(default_factory=list)
    rows: List[RanklistRow] = Field(default_factory=list)


# Derived view-models

class ContestStats(BaseModel):
    total_contests: int = 0
    best_rank: int = 0
    average_rank: int = 0
    total_rating_change: int = 0
    current_rating: int = 0
    max_rating: int = 0

class ProblemStatistics(BaseModel):
    total_solved: int = 0
    rating_distribution: Dict[str, int] = Field(default_factory=dict)
    tag_distribution: Dict[str, int] = Field(default_factory=dict)

class VirtualContestSummary(BaseModel):
    contest_id: int
    contest_name: str
    problems_solved: int
    total_problems: int = config.ASSUMED_PROBLEMS_PER_CONTEST
    participation_time: Optional[int] = None

    @computed_field
    @property
    def status(self) -> Literal["completed", "attempted"]:
        return "completed" if self.problems_solved == self.total_problems else "attempted"

    @computed_field
    @property
    def attempted_at(self) -> Optional[datetime]:
        if self.participation_time is None:
            return None
        return datetime.fromtimestamp(self.participation_time, tz=config.TIMEZONE)

class HeatmapStats(BaseModel):
    all_time_total: int = 0
    last_year_total: int = 0
    last_month_total: int = 0
    max_streak: int = 0
    year_streak: int = 0
    month_streak: int = 0

class UserSummary(BaseModel):
    user: User
    solved_contests: List[int] = Field(default_factory=list)

    @computed_field
    @property
    def solved_contests_count(self) -> int:
        return len(self.solved_contests)

class TrackingEntry(BaseModel):
    contest_id: int
    contest_name: str = ""
    status: Literal["completed", "attempted", "planned", "skipped"]
    problems_solved: int = 0
    total_problems: int = config.ASSUMED_PROBLEMS_PER_CONTEST
    time_spent_minutes: Optional[int] = None
    is_virtual: bool = False

class TrackingSummary(BaseModel):
    total_tracked: int = 0
    completed: int = 0
    attempted: int = 0
    planned: int = 0
    total_time_spent: int = 0
    average_problems_per_contest: int = 0
