from __future__ import annotations

import logging
import time

import requests


class BaseSource:
    """An upstream endpoint returning a JSON array of contest records.

    ``fetch_contests`` never raises: network failures, undecodable bodies and
    bodies that are not arrays all come back as an empty list.
    """

    PLATFORM_NAME: str = ""
    PLATFORM_DISPLAY: str = ""
    ENDPOINT: str = ""
    NO_CACHE: bool = False

    def __init__(self, base_url: str = 'http://localhost:3000', timeout: float = 10.0,
                 max_retries: int = 2, no_cache: bool = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.no_cache = self.NO_CACHE if no_cache is None else no_cache
        self.logger = logging.getLogger(f'source.{self.PLATFORM_NAME}')
        self.session = self._create_session()

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.ENDPOINT}"

    def fetch_contests(self) -> list[dict]:
        try:
            resp = self._request_with_retry(self.url)
            data = resp.json()
        except requests.RequestException as e:
            self.logger.error(f"Failed to fetch {self.url}: {e}")
            return []
        except ValueError as e:
            self.logger.error(f"Non-JSON response from {self.url}: {e}")
            return []

        if not isinstance(data, list):
            self.logger.warning(
                f"Expected a JSON array from {self.url}, got {type(data).__name__}"
            )
            return []

        records = [self.prepare_record(item) for item in data if isinstance(item, dict)]
        dropped = len(data) - len(records)
        if dropped:
            self.logger.warning(f"Dropped {dropped} non-object item(s) from {self.url}")
        self.logger.info(f"Fetched {len(records)} contest(s) from {self.PLATFORM_NAME}")
        return records

    def prepare_record(self, record: dict) -> dict:
        if not record.get('platform'):
            record = dict(record, platform=self.PLATFORM_DISPLAY)
        return record

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({'Accept': 'application/json'})
        if self.no_cache:
            session.headers['Cache-Control'] = 'no-cache'
        return session

    def _request_with_retry(self, url, method='GET', **kwargs):
        for attempt in range(self.max_retries):
            try:
                resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
                resp.raise_for_status()
                return resp
            except requests.RequestException as e:
                self.logger.warning(
                    f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)
                else:
                    raise

    def close(self):
        self.session.close()
