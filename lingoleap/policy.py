from .challenges import ChallengeKind


def policy(env):
    # Strategy: read the active challenge and press the matching button with the
    # correct option as soon as it appears. Once armed, the runner dodges on its
    # own, so there is nothing left to do until the next challenge spawns.
    challenge = env.session.challenge
    if challenge is None or challenge.cleared or challenge.passed:
        return [0, 0]

    option = challenge.options.index(challenge.correct_answer) + 1
    button = 0 if challenge.kind is ChallengeKind.JUMP else 1
    return [option, button]
