"""Coach insights derived from recent sessions.

Each detector looks for one pattern (new PR, streak, training gap, SWOLF
trend, goal proximity, volume change, recovery need) and returns at most one
insight. Insights carry a follow-up prompt for the coaching assistant.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from swimtracker.sessions.models import SwimSession


class InsightType(StrEnum):
    CELEBRATION = "celebration"
    WARNING = "warning"
    SUGGESTION = "suggestion"
    MILESTONE = "milestone"


# Lower number = shown first
INSIGHT_PRIORITY: dict[InsightType, int] = {
    InsightType.WARNING: 1,
    InsightType.CELEBRATION: 2,
    InsightType.SUGGESTION: 3,
    InsightType.MILESTONE: 4,
}

RECENT_SESSION_LIMIT = 14
SWOLF_CHANGE_THRESHOLD_PCT = 3.0


@dataclass(frozen=True)
class CoachInsight:
    type: InsightType
    title: str
    description: str
    prompt: str | None = None

    @property
    def priority(self) -> int:
        return INSIGHT_PRIORITY[self.type]


def _days_between(earlier: datetime, later: datetime) -> int:
    return (later - earlier).days


def check_new_pr(sessions: Sequence[SwimSession], now: datetime) -> CoachInsight | None:
    """Best continuous distance set in the last 7 days and above the previous best."""
    if len(sessions) < 2:
        return None

    pr_session = max(sessions, key=lambda s: s.longest_continuous_distance)
    best = pr_session.longest_continuous_distance
    if best <= 0 or pr_session.date <= now - timedelta(days=7):
        return None

    previous_best = max((s.longest_continuous_distance for s in sessions if s.id != pr_session.id), default=0.0)
    improvement = int(best - previous_best)
    if improvement <= 0:
        return None

    return CoachInsight(
        type=InsightType.CELEBRATION,
        title="New Personal Record!",
        description=f"You hit {int(best)}m continuous, up {improvement}m from your previous best. Keep pushing!",
        prompt="Analyze my recent personal record swim in detail",
    )


def check_streak(sessions: Sequence[SwimSession], now: datetime) -> CoachInsight | None:
    """Three or more consecutive sessions each within 3 days of the next, still active."""
    if len(sessions) < 3:
        return None

    streak = 1
    for newer, older in zip(sessions, sessions[1:]):
        if _days_between(older.date, newer.date) <= 3:
            streak += 1
        else:
            break

    if streak < 3 or sessions[0].date <= now - timedelta(days=4):
        return None

    return CoachInsight(
        type=InsightType.CELEBRATION,
        title=f"{streak}-Swim Streak!",
        description=f"You've been consistent with {streak} swims in a row. That consistency is what builds endurance!",
        prompt="Analyze my recent swimming progress and provide insights",
    )


def check_gap(sessions: Sequence[SwimSession], now: datetime) -> CoachInsight | None:
    """Warn when no swim has been logged for 3 or more days."""
    if not sessions:
        return CoachInsight(
            type=InsightType.WARNING,
            title="Time to Get Started!",
            description="No swim sessions recorded yet. Log your first swim or import one to begin training.",
        )

    days = _days_between(sessions[0].date, now)
    if days >= 5:
        return CoachInsight(
            type=InsightType.WARNING,
            title=f"{days} Days Since Last Swim",
            description="Getting back in the pool soon will help maintain the fitness you've built.",
            prompt=(
                "Generate my next 3 workouts based on my recent progress. "
                f"Note: I haven't swum in {days} days, so ease me back in."
            ),
        )
    if days >= 3:
        return CoachInsight(
            type=InsightType.WARNING,
            title=f"Haven't Swum in {days} Days",
            description="A training gap is forming. Try to get a swim in soon to keep your momentum going.",
            prompt=f"I'd like to adjust my training plan, I haven't been able to swim in {days} days.",
        )
    return None


def average_swolf(sessions: Sequence[SwimSession]) -> float | None:
    """Mean of the sessions' workout-level SWOLF, ignoring sessions without it."""
    values = [s.detail.average_swolf for s in sessions if s.detail is not None and s.detail.average_swolf is not None]
    if not values:
        return None
    return sum(values) / len(values)


def check_swolf_trend(last_week: Sequence[SwimSession], previous_week: Sequence[SwimSession]) -> CoachInsight | None:
    """Report SWOLF changes of at least 3% week over week (lower is better)."""
    current = average_swolf(last_week)
    previous = average_swolf(previous_week)
    if current is None or previous is None or previous == 0:
        return None

    change = current - previous
    if abs(change / previous * 100) < SWOLF_CHANGE_THRESHOLD_PCT:
        return None

    if change < 0:
        return CoachInsight(
            type=InsightType.SUGGESTION,
            title="SWOLF Improving!",
            description=f"Your efficiency is up: SWOLF dropped from {int(previous)} to {int(current)}.",
            prompt="Analyze my recent SWOLF improvement and what's driving it",
        )
    return CoachInsight(
        type=InsightType.WARNING,
        title="SWOLF Trending Up",
        description=f"Your efficiency dipped from {int(previous)} to {int(current)}. This could mean fatigue or technique drift.",
        prompt="My SWOLF has increased recently. Can you give me technique tips to improve my efficiency?",
    )


def check_goal_proximity(sessions: Sequence[SwimSession], goal_distance: float) -> CoachInsight | None:
    """Milestones at 25%, 50% and 90% of the continuous distance goal."""
    best = max((s.longest_continuous_distance for s in sessions), default=0.0)
    if best <= 0 or goal_distance <= 0:
        return None

    percent = int(best / goal_distance * 100)
    if percent >= 90:
        title = f"Almost There: {percent}% to Goal!"
    elif percent >= 50:
        title = f"Halfway There! {percent}%"
    elif percent >= 25:
        title = f"{percent}% to Goal"
    else:
        return None

    return CoachInsight(
        type=InsightType.MILESTONE,
        title=title,
        description=f"Your best continuous swim is {int(best)}m of {int(goal_distance)}m.",
        prompt=f"I'm at {percent}% of my goal with {int(best)}m best continuous. What should I focus on next?",
    )


def check_volume_change(last_week: Sequence[SwimSession], previous_week: Sequence[SwimSession]) -> CoachInsight | None:
    """Flag week-over-week volume changes of +25% or more, or -30% or less."""
    previous_volume = sum(s.total_distance_meters for s in previous_week)
    if previous_volume <= 0:
        return None

    last_volume = sum(s.total_distance_meters for s in last_week)
    change = (last_volume - previous_volume) / previous_volume * 100

    if change >= 25:
        return CoachInsight(
            type=InsightType.SUGGESTION,
            title=f"Volume Up {int(change)}%!",
            description=f"You swam {int(last_volume)}m this week vs {int(previous_volume)}m last week. Watch for fatigue.",
            prompt="Generate my next 3 workouts. I've increased volume significantly this week, so balance progression with recovery.",
        )
    if change <= -30:
        return CoachInsight(
            type=InsightType.SUGGESTION,
            title=f"Volume Down {int(abs(change))}%",
            description=f"You swam {int(last_volume)}m this week vs {int(previous_volume)}m last week. Let's get back on track!",
            prompt="My swim volume dropped this week. Can you help me adjust my plan to get back on track?",
        )
    return None


def check_recovery(sessions: Sequence[SwimSession], now: datetime) -> CoachInsight | None:
    """Suggest recovery when the last three sessions were all hard (difficulty >= 7)."""
    last_three = list(sessions[:3])
    if len(last_three) < 3 or not all(s.difficulty >= 7 for s in last_three):
        return None
    if last_three[-1].date <= now - timedelta(days=10):
        return None

    avg_difficulty = sum(s.difficulty for s in last_three) // 3
    return CoachInsight(
        type=InsightType.WARNING,
        title="Recovery Check",
        description=f"Your last 3 swims averaged {avg_difficulty}/10 difficulty. Consider an easy swim or a rest day.",
        prompt=f"Generate my next 3 workouts. My last 3 swims were very hard (avg {avg_difficulty}/10), so I need a recovery-focused plan.",
    )


def generate_insights(
    sessions: Sequence[SwimSession],
    now: datetime,
    goal_distance: float,
) -> list[CoachInsight]:
    """Run every detector and return the insights sorted by priority.

    Args:
        sessions: All sessions (any order)
        now: Reference time
        goal_distance: Continuous distance goal in meters

    Returns:
        Insights, highest priority first
    """
    ordered = sorted(sessions, key=lambda s: s.date, reverse=True)
    recent = ordered[:RECENT_SESSION_LIMIT]
    week_ago = now - timedelta(days=7)
    two_weeks_ago = now - timedelta(days=14)
    last_week = [s for s in recent if s.date > week_ago]
    previous_week = [s for s in recent if two_weeks_ago < s.date <= week_ago]

    candidates = [
        check_new_pr(ordered, now),
        check_streak(ordered, now),
        check_gap(ordered, now),
        check_swolf_trend(last_week, previous_week),
        check_goal_proximity(ordered, goal_distance),
        check_volume_change(last_week, previous_week),
        check_recovery(ordered, now),
    ]
    insights = [insight for insight in candidates if insight is not None]
    return sorted(insights, key=lambda insight: insight.priority)
