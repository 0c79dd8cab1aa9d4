from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .it_config import ITConfig, ITCredentials
from .urls import UrlBuilder

logger = logging.getLogger(__name__)

S3_NS = "http://s3.amazonaws.com/doc/2006-03-01/"


@dataclass(frozen=True)
class AuthSession:
    token: str
    user_id: str
    project_id: str


def _keystone_password_body(creds: ITCredentials) -> dict:
    domain = {"name": creds.domain}
    return {
        "auth": {
            "identity": {
                "methods": ["password"],
                "password": {
                    "user": {"name": creds.username, "domain": domain, "password": creds.password},
                },
            },
            "scope": {"project": {"name": creds.project, "domain": domain}},
        }
    }


def _create_bucket_body(location: str) -> str:
    root = ET.Element("CreateBucketConfiguration", xmlns=S3_NS)
    ET.SubElement(root, "LocationConstraint").text = location
    return ET.tostring(root, encoding="unicode")


def _bucket_names(xml_text: str) -> list[str]:
    root = ET.fromstring(xml_text)
    names = []
    # Namespaced or not, depending on the gateway.
    for el in root.iter():
        if el.tag.rsplit("}", 1)[-1] == "Bucket":
            for child in el:
                if child.tag.rsplit("}", 1)[-1] == "Name" and child.text:
                    names.append(child.text)
    return names


class StorageApiClient:
    def __init__(self, cfg: ITConfig, *, client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.cfg = cfg
        self.urls = UrlBuilder(cfg)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout, trust_env=False)
        self.session: Optional[AuthSession] = None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "StorageApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _require_session(self) -> AuthSession:
        if self.session is None:
            raise RuntimeError("Not logged in: call login() first")
        return self.session

    def _headers(self) -> dict[str, str]:
        return {"X-Auth-Token": self._require_session().token}

    @staticmethod
    def _expect(op: str, r: httpx.Response, *codes: int) -> None:
        logger.info("[IT] %s response: %s", op, r.status_code)
        if r.status_code not in codes:
            raise AssertionError(f"{op} failed: {r.status_code} {r.text}")

    def login(self, creds: ITCredentials) -> AuthSession:
        url = self.urls.token_login_url()
        logger.info("[IT] Requesting token for %s at %s", creds.username, url)

        r = self._client.post(url, json=_keystone_password_body(creds))
        self._expect("login", r, 200, 201)

        token = r.headers.get("X-Subject-Token", "")
        if not token:
            raise AssertionError(f"login failed: no X-Subject-Token header in {r.status_code} response")

        body = r.json().get("token") or {}
        self.session = AuthSession(
            token=token,
            user_id=str((body.get("user") or {}).get("id") or ""),
            project_id=str((body.get("project") or {}).get("id") or ""),
        )
        return self.session

    def list_aks(self, user_id: Optional[str] = None) -> list[dict[str, Any]]:
        user_id = user_id or self._require_session().user_id
        r = self._client.get(self.urls.aks_list_url(user_id), headers=self._headers())
        self._expect("list_aks", r, 200)
        return r.json().get("credentials", [])

    def list_types(self, tenant_id: Optional[str] = None) -> list[dict[str, Any]]:
        tenant_id = tenant_id or self._require_session().project_id
        r = self._client.get(self.urls.types_url(tenant_id), headers=self._headers())
        self._expect("list_types", r, 200)
        return r.json().get("types", [])

    def add_backend(self, backend: dict[str, Any], tenant_id: Optional[str] = None) -> dict[str, Any]:
        tenant_id = tenant_id or self._require_session().project_id
        url = self.urls.add_backend_url(tenant_id)
        logger.info("[IT] Adding backend %s at %s", backend.get("name"), url)

        r = self._client.post(url, json=backend, headers=self._headers())
        self._expect("add_backend", r, 200, 201)
        return r.json()

    def create_bucket(self, bucket_name: str, location: Optional[str] = None) -> None:
        url = self.urls.create_bucket_url(bucket_name)
        logger.info("[IT] Creating bucket at %s (location=%s)", url, location)

        headers = self._headers()
        content = None
        if location:
            headers["Content-Type"] = "application/xml"
            content = _create_bucket_body(location)
        r = self._client.put(url, content=content, headers=headers)
        self._expect("create_bucket", r, 200)

    def list_buckets(self) -> list[str]:
        r = self._client.get(self.urls.list_bucket_url(), headers=self._headers())
        self._expect("list_buckets", r, 200)
        return _bucket_names(r.text)
