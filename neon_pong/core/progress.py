"""
Session progression: experience points, levels and achievements.

Paddle hits of both sides feed the session experience, victory rewards only
go to the left side.
"""

from neon_pong.core.entities import Progress

XP_PER_HIT = 5
RALLY_ACHIEVEMENT_HITS = 10
RALLY_ACHIEVEMENT_XP = 50

# Goals ending a rally of at least RALLY_BONUS_MIN_HITS pay per hit
RALLY_BONUS_MIN_HITS = 5
RALLY_BONUS_XP_PER_HIT = 2

WIN_XP = 100
FIRST_WIN_XP = 200
QUICK_WIN_MS = 120_000
QUICK_WIN_XP = 150

LEVEL_XP_GROWTH = 1.5


def award_paddle_hit(progress: Progress, rallies: int) -> list[str]:
    """
    Rewards a paddle hit of the primary ball.

    Args:
        progress: Session progression, updated in place
        rallies: Hits in the current rally, this one included

    Returns:
        list[str]: Achievements unlocked by this hit
    """
    progress.current_xp += XP_PER_HIT

    if rallies == RALLY_ACHIEVEMENT_HITS and not progress.achievements.rally10:
        progress.achievements.rally10 = True
        progress.current_xp += RALLY_ACHIEVEMENT_XP
        return ["rally10"]
    return []


def award_rally_bonus(progress: Progress, rallies: int) -> int:
    """Rewards the rally a goal just ended, returns the bonus"""
    if rallies < RALLY_BONUS_MIN_HITS:
        return 0
    bonus = rallies * RALLY_BONUS_XP_PER_HIT
    progress.current_xp += bonus
    return bonus


def award_victory(progress: Progress, game_time_ms: float) -> list[str]:
    """
    Rewards a left side victory.

    Args:
        progress: Session progression, updated in place
        game_time_ms: Simulation time since the game started

    Returns:
        list[str]: Achievements unlocked by this victory
    """
    achievements = progress.achievements
    unlocked = []

    if not achievements.first_win:
        achievements.first_win = True
        progress.current_xp += FIRST_WIN_XP
        unlocked.append("first_win")

    if game_time_ms < QUICK_WIN_MS and not achievements.quick_reflexes:
        achievements.quick_reflexes = True
        progress.current_xp += QUICK_WIN_XP
        unlocked.append("quick_reflexes")

    progress.current_xp += WIN_XP
    return unlocked


def check_level_up(progress: Progress) -> bool:
    """Gains at most one level, the remaining experience carries over"""
    if progress.current_xp < progress.xp_to_next:
        return False

    progress.level += 1
    progress.current_xp -= progress.xp_to_next
    progress.xp_to_next = int(progress.xp_to_next * LEVEL_XP_GROWTH)
    return True
