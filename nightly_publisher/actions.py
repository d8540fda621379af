"""Helpers for talking to the workflow runner through env vars and stdout."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger("nightly_publisher")


def _escape_data(value: str) -> str:
    """Encode a workflow command payload so it stays on one line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def get_input(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Return the ``INPUT_<NAME>`` value for a step input, or an empty string."""
    env = os.environ if env is None else env
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def set_output(name: str, value: str, env: Optional[Mapping[str, str]] = None) -> None:
    """Publish a step output for later workflow steps.

    Multi-line values are written in the ``name<<DELIMITER`` form.
    """
    env = os.environ if env is None else env
    output_file = env.get("GITHUB_OUTPUT")
    logger.debug("Setting output %s=%s", name, value)
    if not output_file:
        sys.stdout.write(f"::set-output name={name}::{_escape_data(value)}\n")
        sys.stdout.flush()
        return
    if "\n" in value or "\r" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        entry = f"{name}={value}\n"
    with Path(output_file).open("a", encoding="utf-8") as handle:
        handle.write(entry)


def set_failed(message: str) -> None:
    """Emit an error annotation; the caller is responsible for the exit code."""
    sys.stdout.write(f"::error::{_escape_data(message)}\n")
    sys.stdout.flush()
