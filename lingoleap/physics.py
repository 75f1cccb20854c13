from dataclasses import dataclass

import pygame

from .config import (
    CROUCH_DURATION,
    GRAVITY,
    GROUND_Y,
    JUMP_VELOCITY,
    PLAYER_HEIGHT,
    PLAYER_WIDTH,
    PLAYER_X,
)


@dataclass(frozen=True)
class Hitbox:
    """Axis-aligned rectangle in float world coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self):
        return self.left + self.width

    @property
    def bottom(self):
        return self.top + self.height

    def overlaps_horizontally(self, other):
        return self.right > other.left and self.left < other.right

    def overlaps_vertically(self, other):
        return self.bottom > other.top and self.top < other.bottom

    def overlaps(self, other):
        return self.overlaps_horizontally(other) and self.overlaps_vertically(other)

    def to_rect(self):
        # pygame.Rect truncates to ints, so it is only used for drawing
        return pygame.Rect(round(self.left), round(self.top), round(self.width), round(self.height))


class PlayerState:
    def __init__(self, x=PLAYER_X, ground_y=GROUND_Y, width=PLAYER_WIDTH, height=PLAYER_HEIGHT):
        self.horizontal_position = x
        self.vertical_position = ground_y
        self.vertical_velocity = 0.0
        self.width = width
        self.height = height
        self.airborne = False
        self.crouching = False
        self.crouch_remaining = 0.0

    @property
    def grounded(self):
        return not self.airborne and not self.crouching

    def hitbox(self):
        if self.crouching:
            half = self.height / 2
            return Hitbox(self.horizontal_position, self.vertical_position + half, self.width, half)
        return Hitbox(self.horizontal_position, self.vertical_position, self.width, self.height)


class PhysicsSimulator:
    """
    Vertical motion of the runner: grounded, airborne arc, or timed crouch.

    The crouch timer is a countdown advanced by ``update``, so it belongs to
    the player state of one run and can never fire into the next one.
    """

    def __init__(self, gravity=GRAVITY, jump_velocity=JUMP_VELOCITY,
                 crouch_duration=CROUCH_DURATION, ground_y=GROUND_Y):
        self.gravity = gravity
        self.jump_velocity = jump_velocity
        self.crouch_duration = crouch_duration
        self.ground_y = ground_y

    def new_player(self, x=PLAYER_X):
        return PlayerState(x=x, ground_y=self.ground_y)

    def trigger_jump(self, player):
        if player.airborne or player.crouching:
            return False
        player.airborne = True
        player.vertical_velocity = self.jump_velocity
        return True

    def trigger_crouch(self, player):
        if player.airborne or player.crouching:
            return False
        player.crouching = True
        player.crouch_remaining = self.crouch_duration
        return True

    def update(self, player, dt):
        if player.crouching:
            player.crouch_remaining -= dt
            if player.crouch_remaining <= 0:
                player.crouching = False
                player.crouch_remaining = 0.0

        if player.airborne:
            # Semi-implicit Euler: velocity first, then position
            player.vertical_velocity += self.gravity * dt
            player.vertical_position += player.vertical_velocity * dt
            if player.vertical_position >= self.ground_y:
                player.vertical_position = self.ground_y
                player.vertical_velocity = 0.0
                player.airborne = False
