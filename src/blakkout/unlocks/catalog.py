"""catalog.py - the fixed set of hidden achievements.

five secrets, declared once. the set never grows at runtime.
order here is the order everything else reports in.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class UnlockDef:
    """one hidden achievement."""
    id: str
    title: str
    description: str
    reward: str
    phrase: tuple          # raw keys that trigger it from anywhere
    command: str           # console command that triggers it


KONAMI_KEYS = (
    "ArrowUp", "ArrowUp", "ArrowDown", "ArrowDown",
    "ArrowLeft", "ArrowRight", "ArrowLeft", "ArrowRight",
    "b", "a",
)

CATALOG = (
    UnlockDef(
        id="konami",
        title="KONAMI CODE",
        description="the legendary key sequence from the 80s",
        reward="10% off the whole merch store with code KONAMI80",
        phrase=KONAMI_KEYS,
        command="konami",
    ),
    UnlockDef(
        id="consoleAccess",
        title="CONSOLE ACCESS",
        description="terminal command for privileged access",
        reward="early access to the next drop, 24h before everyone",
        phrase=tuple("sudo access --grant"),
        command="access",
    ),
    UnlockDef(
        id="glitch",
        title="GLITCH MATRIX",
        description="bending digital reality",
        reward="exclusive glitch wallpaper pack",
        phrase=tuple("ctrl+alt+glitch"),
        command="glitch",
    ),
    UnlockDef(
        id="hidden",
        title="HIDDEN TRUTH",
        description="digging up buried secrets",
        reward="unreleased track from the collective vault",
        phrase=tuple("find_the_truth"),
        command="find_the_truth",
    ),
    UnlockDef(
        id="matrix",
        title="WHITE RABBIT",
        description="following the path of Neo",
        reward="guest list spot at the next event",
        phrase=tuple("follow_the_white_rabbit"),
        command="matrix",
    ),
)

UNLOCK_IDS = tuple(d.id for d in CATALOG)

REWARDS = MappingProxyType({d.id: d.reward for d in CATALOG})

_BY_ID = {d.id: d for d in CATALOG}

GRAND_REWARD = (
    "ALL SECRETS FOUND. exclusive access to the secret rave. "
    "entry code: BLAKKOUT_MASTER"
)


def get(unlock_id: str):
    """the definition for an id, or None."""
    return _BY_ID.get(unlock_id)


def is_known(unlock_id) -> bool:
    return isinstance(unlock_id, str) and unlock_id in _BY_ID


def defaults() -> dict:
    """all-locked state, every known id present."""
    return {uid: False for uid in UNLOCK_IDS}
