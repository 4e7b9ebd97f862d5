# io/engine_logging.py
import json
import logging
import sys

from eb_route.domain.entities.route import RouteQuery, RouteResult
from eb_route.io.business_events import PatternsAppliedBiz, RouteComputedBiz
from eb_route.io.recorder import Recorder
from eb_route.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="eb_route", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


def _shape_query(q: RouteQuery) -> dict:
    mode = getattr(q.mode, "value", q.mode)
    return {"origin": q.origin, "destination": q.destination, "mode": mode, "hour": q.hour}


class EngineLogging(NoopHooks):
    """
    One place to shape and emit structured logs for engine lifecycle and
    per-query events; analytics records go to the recorder if one is set.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self.queries = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _biz(self, cls, **fields):
        if self.recorder:
            self.recorder.emit(
                cls(run_id=self.run_id, seq=self.recorder.next_seq(), name=cls.__name__, **fields)
            )

    # --------------------------------------------------------

    def network_loaded(self, *, nodes, edges, **extra):
        self._emit("INFO", "network_loaded", nodes=nodes, edges=edges, **extra)

    def patterns_applied(self, *, edges, congestion, shortcuts):
        self._emit(
            "INFO", "patterns_applied", edges=edges, congestion=congestion, shortcuts=shortcuts
        )
        self._biz(
            PatternsAppliedBiz,
            edges_scanned=edges,
            congestion_points=congestion,
            shortcuts_found=shortcuts,
        )

    def query_start(self, query: RouteQuery):
        if self.debug:
            self._emit("DEBUG", "query_start", **_shape_query(query))

    def query_end(self, query: RouteQuery, result: RouteResult, *, settled, relaxed, ms):
        self.queries += 1
        extra = {
            **_shape_query(query),
            "found": result.found,
            "nodes": len(result.path),
            "distance_m": round(result.total_distance_m, 3),
            "time_s": round(result.estimated_time_s, 3),
            "ms": round(ms, 3),
        }
        if self.debug:
            extra.update(settled=settled, relaxed=relaxed)
        self._emit("INFO", "route_computed", **extra)
        self._biz(
            RouteComputedBiz,
            origin=query.origin,
            destination=query.destination,
            mode=extra["mode"],
            hour=query.hour,
            found=result.found,
            nodes=len(result.path),
            distance_m=result.total_distance_m,
            time_s=result.estimated_time_s,
        )

    def query_rejected(self, query: RouteQuery, *, reason: str):
        self._emit("WARNING", "query_rejected", **_shape_query(query), reason=reason)
