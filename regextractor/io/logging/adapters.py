from __future__ import annotations

import logging
from typing import Any, Dict, MutableMapping, Tuple


class StructuredAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter whose persistent context is merged with each call's ``extra``.

    Per-call keys win over the adapter context, e.g. an engine adapter created
    with ``{"source": "train.log"}`` can still log ``extra={"rows": 12}``.
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        call_extra: Dict[str, Any] = kwargs.pop("extra", None) or {}
        kwargs["extra"] = {**(self.extra or {}), **call_extra}
        return msg, kwargs


__all__ = ["StructuredAdapter"]
