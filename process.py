import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Literal, Optional, Set

import config
from collect import CodeforcesClient, default_client
from errors import CodeforcesError, UpstreamError
from structs import (Contest, ContestStats, ProblemStatistics, RatingChange, Submission,
                     TrackingEntry, TrackingSummary, User, UserSummary, VirtualContestSummary)
from utils import round_half_up

logger = logging.getLogger(__name__)

Difficulty = Literal["Easy", "Medium", "Hard", "Unknown"]


def solved_contests(submissions: Iterable[Submission]) -> Set[int]:
    contest_problems: Dict[int, Set[str]] = dict()
    for submission in submissions:
        if submission.accepted and submission.contestId:
            if submission.contestId not in contest_problems:
                contest_problems[submission.contestId] = set()
            contest_problems[submission.contestId].add(submission.problem.index)
    # one accepted problem is enough to call the contest solved
    return {contest_id for contest_id, problems in contest_problems.items() if len(problems) > 0}

def get_user_solved_contests(handle: str, client: Optional[CodeforcesClient] = None) -> Set[int]:
    client = client or default_client()
    try:
        submissions = client.get_user_submissions(handle)
    except CodeforcesError as e:
        logger.warning("Failed to get solved contests for %s: %s", handle, e)
        return set()
    return solved_contests(submissions)

def filter_unsolved_contests(contests: Iterable[Contest], solved: Set[int]) -> List[Contest]:
    return [c for c in contests if c.phase == "FINISHED" and c.id not in solved]


def get_contest_difficulty(contest: Contest) -> Difficulty:
    """Rough label from the round's name; only Codeforces-format rounds get one."""
    if contest.type == "CF":
        if "Div. 3" in contest.name or "Educational" in contest.name:
            return "Easy"
        elif "Div. 2" in contest.name:
            return "Medium"
        elif "Div. 1" in contest.name:
            return "Hard"
    return "Unknown"

def get_contest_division(name: str) -> str:
    name = name.lower()
    for division in ("1", "2", "3", "4"):
        if f"div. {division}" in name or f"division {division}" in name:
            return division
    if "educational" in name:
        return "educational"
    return "unknown"

def browse_contests(
    contests: Iterable[Contest],
    search: Optional[str] = None,
    contest_type: Optional[str] = None,
    division: Optional[str] = None,
    sort_by: Literal["date", "name"] = "date",
    descending: bool = True,
) -> List[Contest]:
    """Finished contests matching the browser filters, newest first by default."""
    result = []
    for contest in contests:
        if contest.phase != "FINISHED":
            continue
        if search and search.lower() not in contest.name.lower():
            continue
        if contest_type and contest.type != contest_type:
            continue
        if division and get_contest_division(contest.name) != division:
            continue
        result.append(contest)

    if sort_by == "name":
        result.sort(key=lambda c: c.name, reverse=descending)
    else:
        result.sort(key=lambda c: c.startTimeSeconds or 0, reverse=descending)
    return result


def contest_stats(user: Optional[User], history: List[RatingChange]) -> ContestStats:
    ranks = [change.rank for change in history]
    stats = ContestStats(total_contests=len(history))
    if ranks:
        stats.best_rank = min(ranks)
        stats.average_rank = round_half_up(sum(ranks) / len(ranks))
    if len(history) >= 2:
        stats.total_rating_change = history[-1].newRating - history[0].oldRating
    if user is not None:
        stats.current_rating = user.rating or 0
        stats.max_rating = user.maxRating or 0
    return stats

def get_user_contest_stats(handle: str, client: Optional[CodeforcesClient] = None) -> ContestStats:
    client = client or default_client()
    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            users = pool.submit(client.get_user_info, [handle])
            history = pool.submit(client.get_user_rating_history, handle)
            user_list, rating_history = users.result(), history.result()
    except CodeforcesError as e:
        logger.warning("Failed to get contest stats for %s: %s", handle, e)
        return ContestStats()
    return contest_stats(user_list[0] if user_list else None, rating_history)


def problem_statistics(submissions: Iterable[Submission]) -> ProblemStatistics:
    seen = set()
    freq_ratings: Dict[str, int] = dict()
    freq_tags: Dict[str, int] = dict()
    for submission in submissions:
        if not submission.accepted:
            continue
        key = submission.problem.key
        if key in seen:
            continue
        seen.add(key)

        rating = submission.problem.rating
        if rating:
            bucket = str(rating)
            if bucket not in freq_ratings:
                freq_ratings[bucket] = 0
            freq_ratings[bucket] += 1
        for tag in submission.problem.tags:
            if tag not in freq_tags:
                freq_tags[tag] = 0
            freq_tags[tag] += 1

    return ProblemStatistics(
        total_solved=len(seen),
        rating_distribution=freq_ratings,
        tag_distribution=freq_tags,
    )

def get_problem_statistics(handle: str, client: Optional[CodeforcesClient] = None) -> ProblemStatistics:
    client = client or default_client()
    try:
        submissions = client.get_user_submissions(handle)
    except CodeforcesError as e:
        logger.warning("Failed to get problem statistics for %s: %s", handle, e)
        return ProblemStatistics()
    return problem_statistics(submissions)


def virtual_contests(submissions: Iterable[Submission]) -> List[VirtualContestSummary]:
    """One summary per contest the user took part in virtually.

    Codeforces doesn't hand out problem counts without a standings call per
    contest, so every contest is assumed to have ASSUMED_PROBLEMS_PER_CONTEST
    problems. Treat total_problems as an estimate.
    """
    solved: Dict[int, Set[str]] = dict()
    started: Dict[int, Optional[int]] = dict()
    for submission in submissions:
        if submission.author.participantType != "VIRTUAL" or not submission.contestId:
            continue
        contest_id = submission.contestId
        if contest_id not in solved:
            solved[contest_id] = set()
            started[contest_id] = None
        if started[contest_id] is None:
            started[contest_id] = submission.author.startTimeSeconds
        if submission.accepted:
            solved[contest_id].add(submission.problem.index)

    return [
        VirtualContestSummary(
            contest_id=contest_id,
            contest_name=f"Contest {contest_id}",
            problems_solved=len(indices),
            total_problems=config.ASSUMED_PROBLEMS_PER_CONTEST,
            participation_time=started[contest_id],
        )
        for contest_id, indices in solved.items()
    ]

def get_virtual_contest_submissions(handle: str,
                                    client: Optional[CodeforcesClient] = None) -> List[VirtualContestSummary]:
    client = client or default_client()
    try:
        submissions = client.get_user_submissions(handle)
    except CodeforcesError as e:
        logger.warning("Failed to get virtual contests for %s: %s", handle, e)
        return []
    return virtual_contests(submissions)


def get_user_summary(handle: str, client: Optional[CodeforcesClient] = None) -> UserSummary:
    client = client or default_client()
    with ThreadPoolExecutor(max_workers=2) as pool:
        users = pool.submit(client.get_user_info, [handle])
        solved = pool.submit(get_user_solved_contests, handle, client)
        user_list, solved_ids = users.result(), solved.result()
    if not user_list:
        raise UpstreamError(f"no profile returned for {handle}")
    return UserSummary(user=user_list[0], solved_contests=sorted(solved_ids))

def summarize_tracking(entries: Iterable[TrackingEntry]) -> TrackingSummary:
    entries = list(entries)
    summary = TrackingSummary(total_tracked=len(entries))
    total_problems = 0
    for entry in entries:
        if entry.status == "completed":
            summary.completed += 1
        elif entry.status == "attempted":
            summary.attempted += 1
        elif entry.status == "planned":
            summary.planned += 1
        summary.total_time_spent += entry.time_spent_minutes or 0
        total_problems += entry.problems_solved
    if entries:
        summary.average_problems_per_contest = round_half_up(total_problems / len(entries))
    return summary
