"""Overwrite policy for an existing target directory."""

from __future__ import annotations

import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Callable

from .errors import TargetExists
from .models import OverwritePolicy

logger = logging.getLogger(__name__)


class TargetState(str, Enum):
    ABSENT = "absent"
    PRESENT_NO_OVERWRITE = "present-no-overwrite"
    PRESENT_OVERWRITE = "present-overwrite"
    PRESENT_DELETE = "present-delete"


def classify(exists: bool, policy: OverwritePolicy) -> TargetState:
    if not exists:
        return TargetState.ABSENT
    if policy is OverwritePolicy.DELETE:
        return TargetState.PRESENT_DELETE
    if policy is OverwritePolicy.OVERWRITE:
        return TargetState.PRESENT_OVERWRITE
    return TargetState.PRESENT_NO_OVERWRITE


def prepare_target(
    target_dir: Path,
    policy: OverwritePolicy,
    *,
    delete_tree: Callable[[Path], None] = shutil.rmtree,
) -> TargetState:
    """Apply the overwrite policy before anything is written.

    Raises:
        TargetExists: if the target exists and the policy forbids writing
    """
    state = classify(target_dir.exists(), policy)
    logger.debug(f"Target {target_dir} is {state.value}")

    if state is TargetState.PRESENT_NO_OVERWRITE:
        raise TargetExists(target_dir)
    if state is TargetState.PRESENT_DELETE:
        print(f"Deleting old {target_dir}")
        delete_tree(target_dir)
    return state
