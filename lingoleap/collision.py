from .challenges import ChallengeKind
from .config import (
    GAP_DEPTH,
    GAP_WIDTH,
    GROUND_SURFACE_Y,
    GROUND_Y,
    OBSTACLE_CLEARANCE,
    OBSTACLE_HEIGHT,
    OBSTACLE_WIDTH,
)
from .physics import Hitbox


class CollisionJudge:
    """
    Decides whether the player has run into the active hazard.

    Jump challenges are gaps in the ground: standing over one is fatal.
    Slide challenges are raised obstacles: touching one without crouching is
    fatal. A challenge answered correctly can no longer hurt the player.
    """

    def __init__(self, ground_y=GROUND_Y, ground_surface_y=GROUND_SURFACE_Y):
        self.ground_y = ground_y
        self.ground_surface_y = ground_surface_y

    def hazard_hitbox(self, challenge):
        if challenge.kind is ChallengeKind.JUMP:
            return Hitbox(challenge.world_x, self.ground_surface_y, GAP_WIDTH, GAP_DEPTH)
        top = self.ground_surface_y - OBSTACLE_CLEARANCE - OBSTACLE_HEIGHT
        return Hitbox(challenge.world_x, top, OBSTACLE_WIDTH, OBSTACLE_HEIGHT)

    def swept_hitbox(self, challenge, swept):
        """Area the hazard covered while scrolling ``swept`` px left to its current spot."""
        hazard = self.hazard_hitbox(challenge)
        return Hitbox(hazard.left, hazard.top, hazard.width + max(swept, 0.0), hazard.height)

    def is_fatal(self, player, challenge, swept=0.0):
        if challenge is None or challenge.cleared or challenge.passed:
            return False

        body = player.hitbox()
        hazard = self.swept_hitbox(challenge, swept)
        if not body.overlaps_horizontally(hazard):
            return False

        if challenge.kind is ChallengeKind.JUMP:
            return not player.airborne and player.vertical_position >= self.ground_y
        return not player.crouching and body.overlaps_vertically(hazard)
