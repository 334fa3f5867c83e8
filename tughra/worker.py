"""
Request/response boundary around CipherEngine.

A request is a mapping with the keys text, cycles, baseCharset, mode,
useBaseEncoding, algorithm, encryptionKey (and optionally eccSymbols).
The response always has both keys; exactly one of them is not None:

    {"result": "...", "error": None}
    {"result": None, "error": "Key must be at least 8 characters long."}
"""
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Mapping

from .engine import CipherEngine
from .errors import TughraError


def handle_request(request: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        engine = CipherEngine(
            request.get("mode"),
            request.get("baseCharset"),
            request.get("algorithm"),
            request.get("encryptionKey", ""),
            request.get("useBaseEncoding", False),
            ecc_symbols=request.get("eccSymbols", 0),
        )
        result = engine.process(request.get("text", ""), request.get("cycles", 1))
    except TughraError as e:
        return {"result": None, "error": str(e)}
    return {"result": result, "error": None}


class BackgroundWorker:
    """
    Runs one request at a time off the calling thread.

    Requests are independent; the single worker thread only keeps a slow
    call from blocking the caller.
    """

    def __init__(self):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tughra-worker")

    def submit(self, request: Mapping[str, Any]) -> "Future[Dict[str, Any]]":
        return self._executor.submit(handle_request, dict(request))

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()
        return False
