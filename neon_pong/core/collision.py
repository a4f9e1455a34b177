"""
Collision detection system for Neon Pong
"""

import math
from dataclasses import dataclass

from neon_pong.core.entities import Ball, Paddle, Side, Vector2D


@dataclass
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_tuple(cls, rect: tuple[float, float, float, float]) -> "Rectangle":
        return cls(*rect)


@dataclass
class Circle:
    x: float
    y: float
    radius: float

    @classmethod
    def from_ball(cls, ball: Ball) -> "Circle":
        return cls(ball.position.x, ball.position.y, ball.radius)


@dataclass
class CollisionInfo:
    """Collision result with the data needed for a physics response"""

    collided: bool
    penetration_depth: float | None = None
    normal: Vector2D | None = None  # Unit vector pointing away from the surface
    contact_point: Vector2D | None = None


def check_circle_rect_collision(circle: Circle, rect: Rectangle) -> CollisionInfo:
    """Detects collision between a circle and a rectangle (closest point test)"""
    # Closest point on the rectangle to the circle center
    closest_x = max(rect.x, min(circle.x, rect.x + rect.width))
    closest_y = max(rect.y, min(circle.y, rect.y + rect.height))

    distance_x = circle.x - closest_x
    distance_y = circle.y - closest_y
    distance_squared = distance_x * distance_x + distance_y * distance_y

    if distance_squared > circle.radius * circle.radius:
        return CollisionInfo(collided=False)

    distance = math.sqrt(distance_squared)

    if distance > 0:
        normal = Vector2D(distance_x / distance, distance_y / distance)
    else:
        # Circle center on the rectangle: push out horizontally, away from its middle
        normal = Vector2D(-1.0 if circle.x < rect.x + rect.width / 2 else 1.0, 0.0)

    return CollisionInfo(
        collided=True,
        penetration_depth=circle.radius - distance,
        normal=normal,
        contact_point=Vector2D(closest_x, closest_y),
    )


def check_circle_circle_collision(first: Circle, second: Circle) -> CollisionInfo:
    """Detects collision between two circles, normal points from first to second"""
    dx = second.x - first.x
    dy = second.y - first.y
    distance = math.sqrt(dx * dx + dy * dy)
    combined_radius = first.radius + second.radius

    if distance >= combined_radius:
        return CollisionInfo(collided=False)

    if distance > 0:
        normal = Vector2D(dx / distance, dy / distance)
    else:
        # Coincident centers
        normal = Vector2D(1.0, 0.0)

    return CollisionInfo(
        collided=True, penetration_depth=combined_radius - distance, normal=normal
    )


def check_ball_paddle_collision(ball: Ball, paddle: Paddle, size_multiplier: float = 1.0) -> bool:
    """
    Checks collision between a ball and a paddle.

    The paddle is a rectangle, so only the ball radius counts. An enlarged
    paddle is recentered around its original center.
    """
    rect = Rectangle.from_tuple(paddle.get_rect(size_multiplier))
    return check_circle_rect_collision(Circle.from_ball(ball), rect).collided


def check_ball_power_up_collision(
    ball: Ball, power_up_x: float, power_up_y: float, power_up_radius: float
) -> bool:
    """Checks collision between a ball and a power-up (both circles)"""
    power_up = Circle(power_up_x, power_up_y, power_up_radius)
    return check_circle_circle_collision(Circle.from_ball(ball), power_up).collided


def is_point_in_rect(point_x: float, point_y: float, rect: Rectangle) -> bool:
    """Checks if a point is inside a rectangle (edges included)"""
    return rect.x <= point_x <= rect.x + rect.width and rect.y <= point_y <= rect.y + rect.height


def is_point_in_circle(point_x: float, point_y: float, circle: Circle) -> bool:
    """Checks if a point is inside a circle (edge included)"""
    return get_distance_squared(point_x, point_y, circle.x, circle.y) <= circle.radius**2


def get_circle_bounds(circle: Circle) -> Rectangle:
    """Axis-aligned bounding box of a circle"""
    return Rectangle(
        circle.x - circle.radius, circle.y - circle.radius, circle.radius * 2, circle.radius * 2
    )


def check_aabb_collision(first: Rectangle, second: Rectangle) -> bool:
    """Broad-phase overlap test, rectangles only touching do not collide"""
    return (
        first.x < second.x + second.width
        and first.x + first.width > second.x
        and first.y < second.y + second.height
        and first.y + first.height > second.y
    )


def get_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.sqrt(get_distance_squared(x1, y1, x2, y2))


def get_distance_squared(x1: float, y1: float, x2: float, y2: float) -> float:
    dx = x2 - x1
    dy = y2 - y1
    return dx * dx + dy * dy


class CollisionDetector:
    """Ball-paddle collision handling used by the physics engine"""

    def check_ball_paddle(self, ball: Ball, paddle: Paddle, size_multiplier: float = 1.0) -> bool:
        """Checks collision of a ball with the paddle it is moving towards"""
        return check_ball_paddle_collision(ball, paddle, size_multiplier)

    def separate_ball_from_paddle(self, ball: Ball, paddle: Paddle, side: Side) -> None:
        """Puts the ball flush against the paddle face so it cannot collide again"""
        if side is Side.LEFT:
            ball.position.x = paddle.position.x + paddle.width + ball.radius
        else:
            ball.position.x = paddle.position.x - ball.radius
