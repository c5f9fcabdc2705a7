"""
In-process stand-in for a managed document collection.

Documents are kept as orjson bytes, so every read decodes a fresh copy and
no caller can mutate stored state through a returned object.
"""

from typing import Any, Callable, Optional

import orjson


class InMemoryDocumentCollection:
    def __init__(self, *, name: str) -> None:
        self.name = name
        self._documents: dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._documents

    def put(self, document_id: str, document: dict[str, Any]) -> None:
        self._documents[document_id] = orjson.dumps(document)

    def get(self, document_id: str) -> Optional[dict[str, Any]]:
        raw = self._documents.get(document_id)
        return orjson.loads(raw) if raw is not None else None

    def delete(self, document_id: str) -> bool:
        return self._documents.pop(document_id, None) is not None

    def query(
        self, predicate: Optional[Callable[[dict[str, Any]], bool]] = None
    ) -> list[dict[str, Any]]:
        """Matching documents in insertion order"""
        documents = (orjson.loads(raw) for raw in self._documents.values())
        return [doc for doc in documents if predicate is None or predicate(doc)]
