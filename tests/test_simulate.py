"""
Tests for the headless match runner
"""

from neon_pong.simulate import main, run_match
from neon_pong.utils.config import GameConfig
from neon_pong.utils.leaderboard import JsonFileScoreStore, Leaderboard


class TestRunMatch:
    """Test headless matches"""

    def test_tick_limit(self):
        """Test a match stops at the tick limit"""
        summary = run_match(GameConfig(), max_ticks=200, seed=1)

        assert summary["ticks"] == 200
        assert summary["winner"] is None
        assert set(summary) == {"score", "winner", "ticks", "longest_rally", "power_ups_collected"}

    def test_seeded_matches_repeat(self):
        """Test the same seed gives the same match"""
        config = GameConfig(DIFFICULTY="hard")

        assert run_match(config, 5000, seed=3) == run_match(config, 5000, seed=3)

    def test_full_match_has_winner(self):
        """Test an unlimited match plays until someone wins"""
        summary = run_match(GameConfig(WINNING_SCORE=2, DIFFICULTY="easy"), 200_000, seed=5)

        assert summary["winner"] in ("left", "right")
        assert max(summary["score"]) == 2


class TestCommandLine:
    """Test the command line entry point"""

    def test_main(self, capsys):
        """Test the summary is printed"""
        exit_code = main(["--max-ticks", "300", "--seed", "1", "--no-power-ups"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Final score" in out
        assert "Longest rally" in out

    def test_invalid_config_file(self, tmp_path, capsys):
        """Test an invalid configuration file is reported"""
        path = tmp_path / "config.json"
        path.write_text('{"WINNING_SCORE": 0}')

        assert main(["--config", str(path)]) == 1
        assert "invalid configuration" in capsys.readouterr().out

    def test_leaderboard_printed(self, tmp_path, capsys):
        """Test the stored leaderboard is printed after the match"""
        path = str(tmp_path / "scores.json")
        Leaderboard(JsonFileScoreStore(path)).add_score("ada", 11, 6, "hard")

        exit_code = main(["--max-ticks", "10", "--seed", "1", "--leaderboard", path])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "=== LEADERBOARD ===" in out
        assert " 1. ada: 11-6 (hard)" in out
