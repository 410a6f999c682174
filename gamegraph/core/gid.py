"""Game id derivation from display names."""

import re

_NON_WORD = re.compile(r"\W+")


def gid_from(raw: str) -> str:
    """Derive a stable game id: ``"Mass Effect 3"`` -> ``"gid-mass-effect-3"``.

    Runs of non-word characters collapse to a single ``-``; runs at either end
    are stripped.
    """
    slug = _NON_WORD.sub("-", raw.lower()).strip("-")
    return f"gid-{slug}"
