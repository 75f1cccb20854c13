class WorldScroller:
    """Scroll speed ratchet: grows with every retired challenge, up to the level cap."""

    def __init__(self, level):
        self.reset(level)

    def reset(self, level):
        self.level = level
        self.speed = float(min(level.initial_scroll_speed, level.scroll_speed_cap))
        self.distance = 0.0

    def advance(self, dt):
        """Scroll the world for ``dt`` seconds and return the distance covered."""
        step = self.speed * dt
        self.distance += step
        return step

    def ratchet(self):
        self.speed = min(self.speed + self.level.scroll_speed_increment, self.level.scroll_speed_cap)
        return self.speed
