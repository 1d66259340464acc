from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ProgressReporter:
    """
    Counts created entities and logs a line every `every` entities.

    Example:
        progress = ProgressReporter("nodes", every=100_000)
        for record in records:
            ...
            progress.tick()
        progress.done()
    """

    def __init__(self, label: str, every: int = 100_000, verbose: bool = True):
        self.label = label
        self.every = every
        self.verbose = verbose
        self.count = 0

    def tick(self) -> int:
        self.count += 1
        if self.verbose and self.every > 0 and self.count % self.every == 0:
            logger.info("Created %d %s.", self.count, self.label)
        return self.count

    def done(self) -> int:
        if self.verbose:
            logger.info("Finished %s: %d created.", self.label, self.count)
        return self.count
