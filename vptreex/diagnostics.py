"""Per-operation resource logging.

Every public build or query call is wrapped in :func:`log_operation`, which
emits a single ``key=value`` line once the operation finishes::

    INFO vptreex.algo.build: op=build wall_ms=4.210 cpu_user_ms=4.000 rss_delta=0 points=512

CPU and RSS figures are sampled with :mod:`psutil`; they are reported as ``NA``
when ``VPTREEX_ENABLE_DIAGNOSTICS`` is off.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

import psutil

from vptreex import config as vx_config


@dataclass
class OperationLog:
    op: str
    diagnostics: bool
    metadata: Dict[str, Any] = field(default_factory=dict)
    _wall_start: float = field(default=0.0, repr=False)
    _cpu_start: float | None = field(default=None, repr=False)
    _rss_start: int | None = field(default=None, repr=False)

    def add_metadata(self, **values: Any) -> None:
        self.metadata.update(values)

    def _start(self) -> None:
        self._wall_start = time.perf_counter()
        if self.diagnostics:
            process = psutil.Process()
            self._cpu_start = process.cpu_times().user
            self._rss_start = process.memory_info().rss

    def _finish(self) -> str:
        wall_ms = (time.perf_counter() - self._wall_start) * 1e3
        cpu_user_ms = "NA"
        rss_delta = "NA"
        if self.diagnostics and self._cpu_start is not None and self._rss_start is not None:
            process = psutil.Process()
            cpu_user_ms = f"{(process.cpu_times().user - self._cpu_start) * 1e3:.3f}"
            rss_delta = str(process.memory_info().rss - self._rss_start)
        parts = [
            f"op={self.op}",
            f"wall_ms={wall_ms:.3f}",
            f"cpu_user_ms={cpu_user_ms}",
            f"rss_delta={rss_delta}",
        ]
        parts.extend(f"{key}={value}" for key, value in self.metadata.items())
        return " ".join(parts)


@contextmanager
def log_operation(logger: logging.Logger, op: str) -> Iterator[OperationLog]:
    """Time the enclosed block and log one summary line on success."""

    runtime = vx_config.runtime_config()
    op_log = OperationLog(op=op, diagnostics=runtime.enable_diagnostics)
    op_log._start()
    yield op_log
    if logger.isEnabledFor(logging.INFO):
        logger.info(op_log._finish())


__all__ = ["OperationLog", "log_operation"]
