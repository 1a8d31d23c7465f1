import inspect
import os
import time
from datetime import datetime, timezone
from functools import wraps

import numpy as np
import polars as pl


class MutationHistory:
    """
    Append-only log of mutator calls, mixed into :class:`Network`.

    Each mutator listed in ``_LOGGED`` is wrapped per instance; a call appends
    one event holding 'version', 'ts_utc' (ISO-8601, UTC), 'mono_ns'
    (monotonic nanoseconds since construction), 'op', the bound call
    arguments and 'result'. The owning class calls ``_init_history`` from its
    constructor.
    """

    _LOGGED = ()

    _WRITERS = {
        ".parquet": "write_parquet",
        ".ndjson": "write_ndjson",
        ".jsonl": "write_ndjson",
        ".json": "write_json",
        ".csv": "write_csv",
    }

    def _init_history(self, enabled):
        self._history_enabled = bool(enabled)
        self._history = []
        self._version = 0
        self._history_clock0 = time.perf_counter_ns()
        for name in self._LOGGED:
            fn = getattr(self, name)
            if getattr(fn, "__wrapped__", None) is None:
                setattr(self, name, self._logged(name, fn))

    @staticmethod
    def _event_value(x):
        """INTERNAL: JSON-safe rendering of a call argument or result."""
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, np.generic):
            return x.item()
        if isinstance(x, (list, tuple)):
            return [MutationHistory._event_value(v) for v in x]
        if isinstance(x, (set, frozenset)):
            return sorted((MutationHistory._event_value(v) for v in x), key=repr)
        if isinstance(x, dict):
            return {str(k): MutationHistory._event_value(v) for k, v in x.items()}
        return f"<<{type(x).__name__}>>"

    def _log_event(self, op, **fields):
        if not self._history_enabled:
            return
        self._version += 1
        stamp = datetime.now(timezone.utc).isoformat(timespec="microseconds")
        evt = {
            "version": self._version,
            "ts_utc": stamp.replace("+00:00", "Z"),
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        evt.update((k, self._event_value(v)) for k, v in fields.items())
        self._history.append(evt)

    def _logged(self, op, fn):
        sig = inspect.signature(fn)

        @wraps(fn)
        def wrapper(*args, **kwargs):
            call = sig.bind(*args, **kwargs)
            call.apply_defaults()
            result = fn(*args, **kwargs)
            self._log_event(op, **call.arguments, result=result)
            return result

        return wrapper

    def history(self, as_df: bool = False):
        """
        Return the recorded events.

        Parameters
        ----------
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise a list of dicts.

        Returns
        -------
        list[dict] or polars.DataFrame
            Events in call order. Columns missing from an event are null.
        """
        if as_df:
            return pl.DataFrame(self._history, infer_schema_length=None, strict=False)
        return list(self._history)

    def export_history(self, path):
        """
        Write the events to disk.

        The format follows the extension: '.parquet', '.ndjson' / '.jsonl',
        '.json' or '.csv'. Any other path gets '.parquet' appended.

        Returns
        -------
        int
            Number of events written (0, and no file, if the history is empty).
        """
        if not self._history:
            return 0
        df = self.history(as_df=True)
        path = str(path)
        writer = self._WRITERS.get(os.path.splitext(path)[1].lower())
        if writer is None:
            path, writer = path + ".parquet", "write_parquet"
        getattr(df, writer)(path)
        return df.height

    def enable_history(self, flag: bool = True):
        """Turn event recording on or off (existing events are kept)."""
        self._history_enabled = bool(flag)

    def history_enabled(self):
        return self._history_enabled

    def clear_history(self):
        self._history.clear()

    def mark(self, label: str, **fields):
        """Append a manual ``op='mark'`` event, e.g. around a bulk build."""
        self._log_event("mark", label=label, **fields)
