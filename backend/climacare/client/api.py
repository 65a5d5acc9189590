# climacare/client/api.py
import logging
import os
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")


class ApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        self.status = status
        self.url = url
        super().__init__(message)


def normalize_token(raw: Optional[str]) -> str:
    s = str(raw or "").strip().strip('"').strip("'")
    if s.lower().startswith("bearer "):
        s = s.split(" ", 1)[1].strip()
    return s


def _friendly_http_message(status: int, url: str, error: str = "") -> str:
    if error:
        return error
    if status == 401:
        return "Não autorizado (401): faça login."
    if status == 404:
        return f"Não encontrado (404): {url}"
    if status >= 500:
        return f"Erro no servidor ({status})."
    return f"Erro HTTP {status}"


class ApiClient:
    """Cliente HTTP da API: injeta o bearer e desembrulha o envelope {success, data}."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or DEFAULT_API_BASE).strip().rstrip("/")
        self.token = normalize_token(token if token is not None else os.getenv("API_TOKEN", ""))
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
        except requests.Timeout:
            raise ApiError("Tempo esgotado.", url=url)
        except requests.ConnectionError:
            raise ApiError("Sem conexão: API fora do ar ou URL incorreta.", url=url)
        except requests.RequestException as e:
            raise ApiError(f"Erro de rede: {e}", url=url)

        if resp.status_code >= 400:
            error = ""
            try:
                error = str(resp.json().get("error") or "")
            except ValueError:
                error = resp.text[:160]
            logger.warning("%s %s -> %s %s", method, url, resp.status_code, error)
            raise ApiError(_friendly_http_message(resp.status_code, url, error), resp.status_code, url)
        return resp

    def _json(self, method: str, path: str, **kwargs) -> Any:
        body = self.request(method, path, **kwargs).json()
        if isinstance(body, dict) and "success" in body:
            if not body["success"]:
                raise ApiError(str(body.get("error") or "Erro desconhecido"))
            return body.get("data")
        return body

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._json("GET", path, params=params)

    def post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self._json("POST", path, json=payload)

    def put(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self._json("PUT", path, json=payload)

    def delete(self, path: str) -> Any:
        return self._json("DELETE", path)

    def get_text(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        return self.request("GET", path, params=params).text

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Autentica (usuário ou e-mail) e guarda o token neste cliente."""
        data = self._json("POST", "/api/auth/login", data={"username": username, "password": password})
        self.token = normalize_token(data.get("token"))
        return data

    def health(self) -> Any:
        return self.get("/health")
