"""
Happy Thoughts API — Sample Data Loader
=========================================

What:  Inserts the bundled sample thoughts (data/thoughts.json).
When:  On startup when SEED_DATABASE=true, and only if the table is empty.

Samples go through validate_thought() like any client input; a sample that
fails is skipped with a warning instead of aborting the seed.
"""

import json
import logging
import math
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from thoughts_api.models.thought import Thought
from thoughts_api.validation import normalize_message, validate_thought

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).parent / "data" / "thoughts.json"


def _sample_hearts(sample: Dict[str, Any]) -> Optional[int]:
    """Hearts of a sample as a non-negative int, or None when it is not a number."""
    hearts = sample.get("hearts", 0)
    if isinstance(hearts, bool) or not isinstance(hearts, (int, float)):
        return None
    if not math.isfinite(hearts):
        return None
    return max(0, int(hearts))


def load_seed_file(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    with open(path or SEED_FILE, encoding="utf-8") as f:
        return json.load(f)


async def seed_thoughts(db: AsyncSession, samples: Optional[List[Dict[str, Any]]] = None) -> int:
    """
    Insert sample thoughts into an empty table.

    Samples are given descending createdAt values one minute apart, in file
    order, so the first sample is the newest.

    Returns:
        Number of thoughts inserted (0 when the table already had data).
    """
    count = (await db.execute(select(func.count(Thought.id)))).scalar() or 0
    if count:
        logger.info("Seed skipped: %d thoughts already stored", count)
        return 0

    samples = samples if samples is not None else load_seed_file()
    now = datetime.now(timezone.utc)
    inserted = 0

    for index, sample in enumerate(samples):
        result = validate_thought(sample)
        if not result.valid:
            logger.warning("Skipping invalid sample thought %d: %s", index, ", ".join(result.errors))
            continue
        hearts = _sample_hearts(sample)
        if hearts is None:
            logger.warning("Skipping sample thought %d: hearts is not a number", index)
            continue
        db.add(
            Thought(
                message=normalize_message(sample["message"]),
                hearts=hearts,
                created_at=now - timedelta(minutes=index),
            )
        )
        inserted += 1

    await db.flush()
    logger.info("Seeded %d sample thoughts", inserted)
    return inserted
