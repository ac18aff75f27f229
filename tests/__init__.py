"""
Test package initializer.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from typing import Any
from unittest import mock

_ENV_FLAGS = ("RTK_REWRITE_DISABLED", "RTK_REWRITE_THROUGH_OPERATORS")


class TempDirTestCase(unittest.TestCase):
    """Base test class that provides a temporary directory for each test.

    Also patches Path.home() to return the temp directory, ensuring tests
    don't read real user config or write logs under ~/.cc-rtk-rewrite/, and
    clears the RTK_REWRITE_* environment flags.
    """

    tmpdir: Path
    _tmpdir_obj: tempfile.TemporaryDirectory[str]
    _home_patch: Any  # mock._patch type is complex, use Any for simplicity
    _env_patch: Any

    def setUp(self) -> None:
        super().setUp()
        self._tmpdir_obj = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmpdir_obj.name)
        # Patch Path.home() to prevent tests from reading real user config
        self._home_patch = mock.patch.object(Path, "home", return_value=self.tmpdir)
        self._home_patch.start()
        self._env_patch = mock.patch.dict(os.environ)
        self._env_patch.start()
        for name in _ENV_FLAGS:
            os.environ.pop(name, None)

    def tearDown(self) -> None:
        self._env_patch.stop()
        self._home_patch.stop()
        self._tmpdir_obj.cleanup()
        super().tearDown()
