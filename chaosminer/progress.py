"""Progress reporting for long integrations and spread scans.

The numerical code never writes to the console. It accepts an optional
callback ``progress(label, done, total)`` and calls it every
``progress_every`` iterations plus once on completion.
"""

from typing import Callable, Dict, Optional

from tqdm import tqdm

ProgressCallback = Callable[[str, int, int], None]


def report(
    progress: Optional[ProgressCallback],
    label: str,
    done: int,
    total: int,
) -> None:
    """Invoke ``progress`` if one was given."""
    if progress is not None:
        progress(label, done, total)


class TqdmProgress:
    """Progress callback that renders one tqdm bar per label.

    Usage::

        with TqdmProgress() as progress:
            integrate(params, 1_000_000, progress=progress)
    """

    def __init__(self, leave: bool = False, **tqdm_kwargs):
        self.leave = leave
        self.tqdm_kwargs = tqdm_kwargs
        self._bars: Dict[str, tqdm] = {}

    def __call__(self, label: str, done: int, total: int) -> None:
        bar = self._bars.get(label)
        if bar is None:
            bar = tqdm(
                total=total,
                desc=label,
                unit="pt",
                dynamic_ncols=True,
                leave=self.leave,
                **self.tqdm_kwargs,
            )
            self._bars[label] = bar
        bar.update(max(0, done - bar.n))
        if done >= total:
            bar.close()
            del self._bars[label]

    def close(self) -> None:
        for bar in self._bars.values():
            bar.close()
        self._bars.clear()

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
