"""
Unit tests for ball and paddle kinematics

Tests the pure kinematics functions including:
- Serve randomization
- Wall and goal detection
- Paddle bounce (acceleration, momentum transfer, hit position, chaos)
- Speed limits
- Trajectory prediction with wall reflections
"""

import random

import pytest

from neon_pong.core.entities import Ball, Side, Vector2D
from neon_pong.core.kinematics import (
    apply_chaos_effect,
    apply_speed_limits,
    bounce_off_wall,
    calculate_ball_speed,
    calculate_paddle_bounce,
    calculate_paddle_velocity,
    check_ball_out_of_bounds,
    check_wall_collision,
    predict_ball_y,
    reset_ball,
    update_ball_position,
    update_paddle_position,
)
from neon_pong.utils.config import PhysicsConfig


class TestBallMovement:
    """Test serve and straight-line movement"""

    def test_reset_ball_serves_from_center(self, fixed_random):
        """Test the serve starts at the canvas center"""
        position, _ = reset_ball(1400, 700, rng=fixed_random(0.75))

        assert position.x == 700
        assert position.y == 350

    def test_reset_ball_serves_right(self, fixed_random):
        """Test a high draw serves to the right with a downward slope"""
        _, velocity = reset_ball(1400, 700, 6, 3, rng=fixed_random(0.75))

        assert velocity.x == 6
        assert velocity.y == pytest.approx(1.2)

    def test_reset_ball_serves_left(self, fixed_random):
        """Test a low draw serves to the left with an upward slope"""
        _, velocity = reset_ball(1400, 700, 6, 3, rng=fixed_random(0.25))

        assert velocity.x == -6
        assert velocity.y == pytest.approx(-1.2)

    def test_serve_vertical_speed_range(self):
        """Test the vertical serve speed stays within 80% of the configured range"""
        rng = random.Random(3)
        for _ in range(200):
            _, velocity = reset_ball(1400, 700, 6, 3, rng=rng)
            assert abs(velocity.x) == 6
            assert -2.4 <= velocity.y <= 2.4

    def test_update_ball_position(self):
        """Test the ball moves by its velocity"""
        ball = Ball(100, 100, 5, -3)

        assert update_ball_position(ball) == Vector2D(105, 97)

    def test_update_ball_position_with_multiplier(self):
        """Test the fast ball multiplier scales the displacement"""
        ball = Ball(100, 100, 4, 2)

        assert update_ball_position(ball, 1.5) == Vector2D(106, 103)


class TestWallsAndGoals:
    """Test wall bounces and goal detection"""

    def test_ball_touching_top_wall(self):
        """Test a ball touching the top wall collides"""
        ball = Ball(100, 8, 0, -3, radius=8)

        assert check_wall_collision(ball, 700) is True

    def test_ball_touching_bottom_wall(self):
        """Test a ball touching the bottom wall collides"""
        ball = Ball(100, 692, 0, 3, radius=8)

        assert check_wall_collision(ball, 700) is True

    def test_ball_in_field_no_wall_collision(self):
        """Test a ball away from the walls does not collide"""
        ball = Ball(100, 350, 0, 3, radius=8)

        assert check_wall_collision(ball, 700) is False

    def test_bounce_off_wall_reflects_vertical_velocity(self):
        """Test the bounce only flips the vertical component"""
        ball = Ball(100, 5, 4, -3)

        assert bounce_off_wall(ball) == 3

    def test_ball_past_left_goal(self):
        """Test a ball beyond the left edge is out on the left side"""
        assert check_ball_out_of_bounds(Ball(-1, 300, -5, 0), 1400) is Side.LEFT

    def test_ball_past_right_goal(self):
        """Test a ball beyond the right edge is out on the right side"""
        assert check_ball_out_of_bounds(Ball(1401, 300, 5, 0), 1400) is Side.RIGHT

    def test_ball_on_goal_line_not_out(self):
        """Test the goal lines themselves are still in the field"""
        assert check_ball_out_of_bounds(Ball(0, 300, -5, 0), 1400) is None
        assert check_ball_out_of_bounds(Ball(1400, 300, 5, 0), 1400) is None


class TestPaddleBounce:
    """Test the paddle bounce formula"""

    def test_center_hit_goes_straight(self, fixed_random):
        """Test a center hit reverses and accelerates the ball without deflection"""
        ball = Ball(60, 300, 5, 0)

        velocity = calculate_paddle_bounce(ball, 260, 80, 0, PhysicsConfig(), fixed_random(0.9))

        assert velocity.x == pytest.approx(-5.5)
        assert velocity.y == pytest.approx(0.0)

    def test_edge_hit_deflects(self, fixed_random):
        """Test a hit at the paddle bottom deflects by the full angle factor"""
        ball = Ball(60, 340, 5, 0)

        velocity = calculate_paddle_bounce(ball, 260, 80, 0, PhysicsConfig(), fixed_random(0.9))

        assert velocity.y == pytest.approx(3.5)

    def test_top_edge_hit_deflects_up(self, fixed_random):
        """Test a hit at the paddle top deflects upwards"""
        ball = Ball(60, 260, 5, 0)

        velocity = calculate_paddle_bounce(ball, 260, 80, 0, PhysicsConfig(), fixed_random(0.9))

        assert velocity.y == pytest.approx(-3.5)

    def test_momentum_transfer(self, fixed_random):
        """Test the paddle velocity is partially transferred to the ball"""
        ball = Ball(60, 300, -5, 0)

        velocity = calculate_paddle_bounce(ball, 260, 80, 5, PhysicsConfig(), fixed_random(0.9))

        assert velocity.x == pytest.approx(5.5)
        assert velocity.y == pytest.approx(2.0)

    def test_chaos_nudge(self, fixed_random):
        """Test a low draw triggers the random nudge"""
        ball = Ball(60, 300, 5, 0)

        velocity = calculate_paddle_bounce(ball, 260, 80, 0, PhysicsConfig(), fixed_random(0.1))

        # (0.1 - 0.5) * 6
        assert velocity.y == pytest.approx(-2.4)

    def test_vertical_speed_clamped(self, fixed_random):
        """Test the vertical velocity never exceeds the maximum speed"""
        ball = Ball(60, 340, 5, 20)

        velocity = calculate_paddle_bounce(ball, 260, 80, 10, PhysicsConfig(), fixed_random(0.9))

        assert velocity.y == pytest.approx(15.0)


class TestSpeedLimits:
    """Test minimum and maximum ball speed"""

    def test_slow_ball_scaled_up(self):
        """Test a slow ball is brought to the minimum speed"""
        velocity = apply_speed_limits(Ball(0, 0, 1, 0), PhysicsConfig())

        assert velocity.x == pytest.approx(4.0)
        assert velocity.y == pytest.approx(0.0)

    def test_fast_ball_scaled_down_keeping_direction(self):
        """Test a fast ball is slowed to the maximum speed in the same direction"""
        velocity = apply_speed_limits(Ball(0, 0, 30, 40), PhysicsConfig())

        assert velocity.x == pytest.approx(9.0)
        assert velocity.y == pytest.approx(12.0)

    def test_ball_within_limits_unchanged(self):
        """Test a ball within the limits keeps its velocity"""
        velocity = apply_speed_limits(Ball(0, 0, 6, 8), PhysicsConfig())

        assert velocity == Vector2D(6, 8)

    def test_ball_at_rest_gets_minimum_speed(self):
        """Test a ball at rest gets a horizontal minimum-speed velocity"""
        velocity = apply_speed_limits(Ball(0, 0, 0, 0), PhysicsConfig())

        assert velocity == Vector2D(4.0, 0.0)

    def test_calculate_ball_speed(self):
        """Test the speed is the velocity magnitude"""
        assert calculate_ball_speed(Ball(0, 0, 3, 4)) == pytest.approx(5.0)


class TestPrediction:
    """Test the intercept prediction used by the AI"""

    def test_prediction_without_bounce(self):
        """Test a straight trajectory"""
        ball = Ball(0, 100, 1, 1)

        assert predict_ball_y(ball, 50, 600) == pytest.approx(150)

    def test_prediction_with_one_bounce(self):
        """Test a trajectory reflected by the bottom wall"""
        ball = Ball(0, 500, 10, 10)

        assert predict_ball_y(ball, 150, 600) == pytest.approx(550)

    def test_prediction_with_many_bounces(self):
        """Test a long trajectory folded back into the field"""
        ball = Ball(0, 50, 5, -10)

        # 200 frames: 50 - 2000 = -1950, folded into 450
        assert predict_ball_y(ball, 1000, 600) == pytest.approx(450)

    def test_prediction_stays_in_field(self):
        """Test predictions are always within the canvas height"""
        for dy in (-14.0, -7.3, 0.5, 3.3, 12.9):
            ball = Ball(700, 350, 2.5, dy)
            predicted = predict_ball_y(ball, 1348, 700)
            assert 0 <= predicted <= 700

    def test_prediction_without_horizontal_velocity(self):
        """Test a ball with no horizontal velocity predicts its current y"""
        ball = Ball(100, 321, 0, 5)

        assert predict_ball_y(ball, 1000, 600) == 321


class TestPaddleKinematics:
    """Test paddle movement helpers"""

    def test_paddle_moves(self):
        """Test a free move"""
        assert update_paddle_position(100, 5, 80, 700) == 105

    def test_paddle_clamped_at_top(self):
        """Test the paddle cannot leave through the top"""
        assert update_paddle_position(3, -10, 80, 700) == 0

    def test_paddle_clamped_at_bottom(self):
        """Test the paddle cannot leave through the bottom"""
        assert update_paddle_position(615, 10, 80, 700) == 620

    def test_paddle_velocity(self):
        """Test the velocity is the signed displacement"""
        assert calculate_paddle_velocity(104.5, 100) == pytest.approx(4.5)
        assert calculate_paddle_velocity(100, 104.5) == pytest.approx(-4.5)

    def test_chaos_effect(self, fixed_random):
        """Test the chaos nudge applies to both axes"""
        velocity = apply_chaos_effect(Ball(0, 0, 5, 5), 2.0, fixed_random(1.0))

        assert velocity == Vector2D(6.0, 6.0)
