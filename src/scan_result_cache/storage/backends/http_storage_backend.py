# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2024-present Datadog, Inc.

import json
import logging
from typing import Any
from urllib.parse import quote

import requests
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from scan_result_cache.model.identifier import Identifier
from scan_result_cache.model.scan_result import ScanResult
from scan_result_cache.model.serialization import (
    scan_result_from_dict,
    scan_result_to_dict,
)
from scan_result_cache.storage.backends.abstract_storage_backend import (
    StorageBackend,
)
from scan_result_cache.storage.errors import (
    BackendError,
    BackendUnavailableError,
    CorruptRecordError,
)

# Get application-specific logger
logger = logging.getLogger("scan_result_cache")

DOCUMENT_NAME = "scan-results.json"


class _DocumentChangedError(Exception):
    """The document was changed by another writer between reading and writing it."""

    pass


class HttpStorageBackend(StorageBackend):
    """Stores scan results in documents on a remote HTTP server.

    There is one JSON document per identifier holding the list of all its
    results. Appending reads the document and writes it back conditionally
    with the ETag that was read (If-None-Match for a new document). If
    another writer changed the document in between the server answers 412
    and the append is retried on the fresh document after a short random
    delay. A document that is not a JSON list is left untouched: appending to
    it fails and reading it yields no results.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        max_retries: int = 5,
        retry_backoff: float = 0.1,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)
        logger.info(
            f"Using HTTP scan results storage at {self.base_url} with {self.timeout} seconds timeout."
        )

    def _document_url(self, id: Identifier) -> str:
        components = [id.type, id.namespace or "_", id.name, id.version]
        return "/".join(
            [self.base_url]
            + [quote(component, safe="") for component in components]
            + [DOCUMENT_NAME]
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise BackendUnavailableError(
                f"{method} {url} timed out after {self.timeout} seconds."
            ) from e
        except requests.RequestException as e:
            raise BackendUnavailableError(f"{method} {url} failed: {e}") from e

    def _raise_for_status(self, response: requests.Response, action: str) -> None:
        if response.status_code >= 500:
            raise BackendUnavailableError(
                f"Could not {action}: server answered {response.status_code}, {response.text}"
            )
        if response.status_code >= 400:
            raise BackendError(
                f"Could not {action}: server answered {response.status_code}, {response.text}"
            )

    def _fetch_document(self, id: Identifier) -> tuple[list[Any], str | None]:
        """Return the raw records of the document and its ETag (None if it does not exist).

        Raises CorruptRecordError if the document is not a JSON list.
        """
        url = self._document_url(id)
        response = self._request("GET", url)
        if response.status_code == 404:
            return [], None
        self._raise_for_status(response, f"read scan results for {id}")

        etag = response.headers.get("ETag")
        try:
            records = response.json()
        except ValueError as e:
            raise CorruptRecordError(url, e) from e
        if not isinstance(records, list):
            raise CorruptRecordError(url, TypeError("document is not a list"))
        return records, etag

    def _put_once(self, id: Identifier, url: str, record: dict[str, Any]) -> None:
        # a corrupt document is never overwritten, the error propagates
        records, etag = self._fetch_document(id)
        headers = {"Content-Type": "application/json"}
        if etag is None:
            headers["If-None-Match"] = "*"
        else:
            headers["If-Match"] = etag
        response = self._request(
            "PUT", url, data=json.dumps(records + [record]), headers=headers
        )
        if response.status_code == 412:
            raise _DocumentChangedError(url)
        self._raise_for_status(response, f"store scan result for {id}")

    def append(self, id: Identifier, result: ScanResult) -> None:
        url = self._document_url(id)
        record = scan_result_to_dict(result)
        # 412 is retried after a random exponential wait
        retrying = Retrying(
            retry=retry_if_exception_type(_DocumentChangedError),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_random_exponential(multiplier=self.retry_backoff),
            before_sleep=lambda state: logger.debug(
                f"Scan results for {id} changed concurrently, retrying append "
                f"(attempt {state.attempt_number}/{self.max_retries})."
            ),
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._put_once(id, url, record)
        except RetryError as e:
            raise BackendUnavailableError(
                f"Could not store scan result for {id}: document kept changing after {self.max_retries} attempts."
            ) from e
        logger.debug(f"Stored scan result for {id} at {url}.")

    def load_all(self, id: Identifier) -> list[ScanResult]:
        try:
            records, _ = self._fetch_document(id)
        except CorruptRecordError as e:
            logger.warning(str(e))
            return []
        results = []
        for index, record in enumerate(records):
            try:
                results.append(scan_result_from_dict(record))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(
                    str(CorruptRecordError(f"{self._document_url(id)}#{index}", e))
                )
        return results
