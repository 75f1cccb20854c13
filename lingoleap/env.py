import logging
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import gymnasium as gym
import numpy as np
import pygame
from gymnasium.spaces import Box, MultiDiscrete

from .challenges import ChallengeKind
from .config import (
    DEFAULT_LEVELS,
    FPS,
    FRAME_DT,
    GROUND_SURFACE_Y,
    MAX_STEPS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
)
from .session import GameSession
from .state import RunPhase

GAME_OVER_PENALTY = 10.0


class GameEnv(gym.Env):
    """
    A Gymnasium environment for the vocabulary runner.

    The agent picks one of three answers to the current prompt. A correct
    answer makes the runner jump over the next gap or slide under the next
    obstacle on its own; a wrong one ends the run.
    """
    metadata = {"render_modes": ["rgb_array"]}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: press 1, 2 or 3 to pick the answer. The runner jumps or slides by itself once you are right."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "An endless runner that teaches vocabulary. Translate the word to jump the gap, "
        "recognize it to slide under the barrier. Reach the level's score goal to unlock the next level."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = True

    def __init__(self, render_mode="rgb_array", vocabulary=None, levels=DEFAULT_LEVELS, level_id=None, sink=None):
        super().__init__()
        self.render_mode = render_mode

        # Screen and rendering setup
        self.width, self.height = SCREEN_WIDTH, SCREEN_HEIGHT
        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.width, self.height))
        self.clock = pygame.time.Clock()
        self.font_large = pygame.font.Font(None, 40)
        self.font_small = pygame.font.Font(None, 26)

        # EXACT spaces:
        self.observation_space = Box(
            low=0, high=255, shape=(self.height, self.width, 3), dtype=np.uint8
        )
        # [answer: none/option 1/option 2/option 3, button: jump/slide]
        self.action_space = MultiDiscrete([4, 2])

        # Colors
        self.COLOR_SKY = (135, 206, 235)
        self.COLOR_GROUND = (139, 69, 19)
        self.COLOR_GAP = (0, 0, 0)
        self.COLOR_OBSTACLE = (255, 68, 68)
        self.COLOR_PLAYER = (255, 107, 107)
        self.COLOR_ARMED = (80, 200, 120)
        self.COLOR_TEXT = (0, 0, 0)

        self.session = GameSession(vocabulary=vocabulary, levels=levels, sink=sink)
        self.level_id = level_id
        self.steps = 0
        self.last_events = []

        self.reset()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        level_id = (options or {}).get("level_id", self.level_id)
        self.steps = 0
        self.last_events = self.session.start_run(level_id, np_random=self.np_random)

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.session.phase is not RunPhase.PLAYING:
            return self._get_observation(), 0.0, True, False, self._get_info()

        # Unpack factorized action
        answer = int(action[0])
        button = int(action[1])

        score_before = self.session.score
        events = []

        challenge = self.session.challenge
        if answer > 0 and challenge is not None:
            events += self.session.submit_answer(button, challenge.options[answer - 1])
        events += self.session.step(FRAME_DT)
        self.steps += 1
        self.last_events = events

        reward = float(self.session.score - score_before)
        if self.session.phase is RunPhase.GAME_OVER:
            reward -= GAME_OVER_PENALTY

        terminated = self.session.phase is not RunPhase.PLAYING or self.steps >= MAX_STEPS

        return (
            self._get_observation(),
            reward,
            terminated,
            False,  # truncated always False
            self._get_info()
        )

    def _get_observation(self):
        self.screen.fill(self.COLOR_SKY)
        self._render_game()
        self._render_ui()

        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _render_game(self):
        ground = pygame.Rect(0, int(GROUND_SURFACE_Y), self.width, self.height - int(GROUND_SURFACE_Y))
        pygame.draw.rect(self.screen, self.COLOR_GROUND, ground)

        challenge = self.session.challenge
        if challenge is not None and not challenge.passed:
            hazard = self.session.judge.hazard_hitbox(challenge).to_rect()
            color = self.COLOR_GAP if challenge.kind is ChallengeKind.JUMP else self.COLOR_OBSTACLE
            pygame.draw.rect(self.screen, color, hazard)

        player = self.session.player
        body = player.hitbox().to_rect()
        armed = challenge is not None and challenge.armed_to_avoid
        pygame.draw.rect(self.screen, self.COLOR_ARMED if armed else self.COLOR_PLAYER, body)
        # Eyes
        pygame.draw.rect(self.screen, self.COLOR_TEXT, (body.x + 10, body.y + 10, 5, 5))
        pygame.draw.rect(self.screen, self.COLOR_TEXT, (body.x + 25, body.y + 10, 5, 5))

    def _render_ui(self):
        score_text = self.font_large.render(f"Score: {self.session.score}", True, self.COLOR_TEXT)
        self.screen.blit(score_text, (20, 20))
        level_text = self.font_small.render(f"Level {self.session.state.current_level}", True, self.COLOR_TEXT)
        self.screen.blit(level_text, (self.width - level_text.get_width() - 20, 20))

        challenge = self.session.challenge
        if challenge is None or challenge.passed:
            return

        verb = "Translate" if challenge.kind is ChallengeKind.JUMP else "Recognize"
        prompt_text = self.font_large.render(f"{verb}: {challenge.prompt}", True, self.COLOR_TEXT)
        self.screen.blit(prompt_text, (20, 70))
        for i, option in enumerate(challenge.options):
            option_text = self.font_small.render(f"{i + 1}) {option}", True, self.COLOR_TEXT)
            self.screen.blit(option_text, (20 + i * 200, 115))

    def _get_info(self):
        snap = self.session.snapshot()
        snap["steps"] = self.steps
        snap["events"] = [event.kind for event in self.last_events]
        return snap

    def close(self):
        pygame.quit()

    def validate_implementation(self):
        '''
        Verify spaces, reset and step behave as declared.
        '''
        print("Running implementation validation...")
        # Test action space
        assert self.action_space.shape == (2,)
        assert self.action_space.nvec.tolist() == [4, 2]

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.height, self.width, 3)
        assert test_obs.dtype == np.uint8

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.height, self.width, 3)
        assert isinstance(info, dict)

        # Test step
        obs, reward, term, trunc, info = self.step([0, 0])
        assert obs.shape == (self.height, self.width, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        print("✓ Implementation validated successfully")


if __name__ == "__main__":
    # Manual play: keys 1-3 answer with the button of the current challenge
    logging.basicConfig(level=logging.INFO)
    env = GameEnv()
    obs, info = env.reset()

    pygame.display.set_caption("LingoLeap")
    screen = pygame.display.set_mode((env.width, env.height))

    running = True
    while running:
        action = [0, 0]

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                    action[0] = event.key - pygame.K_0
                    challenge = env.session.challenge
                    if challenge is not None and challenge.kind is ChallengeKind.SLIDE:
                        action[1] = 1
                elif event.key == pygame.K_r:  # Press R to restart
                    obs, info = env.reset()
                    continue

        obs, reward, terminated, truncated, info = env.step(action)
        if terminated and env.steps > 0:
            print(f"{info['phase']}: score {info['score']} (high score {info['high_score']}). Press 'R' to play again.")
            env.steps = 0

        frame = np.transpose(obs, (1, 0, 2))
        surf = pygame.surfarray.make_surface(frame)
        screen.blit(surf, (0, 0))
        pygame.display.flip()

        env.clock.tick(FPS)

    env.close()
