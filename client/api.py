"""Thin REST client for the MoodTrackr API."""
import logging
import requests

from schemas import METRIC_FIELDS

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code, message):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ApiClient:
    def __init__(self, base_url, token=None, session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        headers = kwargs.pop('headers', {})
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"

        response = self.session.request(
            method,
            f"{self.base_url}/api{path}",
            headers=headers,
            timeout=self.timeout,
            **kwargs,
        )
        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            message = body.get('message') or response.reason
            logger.warning(f"API error {response.status_code} on {method} {path}: {message}")
            raise ApiError(response.status_code, message)
        return body.get('data')

    # ---------- Auth ----------

    def login_with_google(self, id_token):
        data = self._request('POST', '/auth/google', json={'token': id_token})
        self.token = data['token']
        return data['user']

    def get_user(self):
        return self._request('GET', '/auth/user')

    # ---------- Logs ----------

    def create_log(self, fields):
        return self._request('POST', '/logs', json=fields)

    def list_logs(self, start_date=None, end_date=None, limit=None):
        params = {'startDate': start_date, 'endDate': end_date, 'limit': limit}
        return self._request('GET', '/logs', params={k: v for k, v in params.items() if v is not None})

    def get_log(self, log_id):
        return self._request('GET', f"/logs/{log_id}")

    def update_log(self, log_id, fields):
        return self._request('PUT', f"/logs/{log_id}", json=fields)

    def delete_log(self, log_id):
        return self._request('DELETE', f"/logs/{log_id}")

    def get_summary(self, window=None, start_date=None, end_date=None, metrics=None):
        params = {
            'window': window,
            'startDate': start_date,
            'endDate': end_date,
            'metrics': ','.join(metrics) if metrics else None,
        }
        return self._request('GET', '/logs/summary', params={k: v for k, v in params.items() if v is not None})

    def fetch_window(self, kind):
        """Full projections for the current weekly or monthly window."""
        return self.get_summary(window=kind, metrics=METRIC_FIELDS)['logs']
