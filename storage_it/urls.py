"""Endpoint URLs of the storage service REST API.

Plain concatenation over ITConfig: nothing is encoded or validated, so an
empty config field shows up as a missing segment in the result.
"""

from __future__ import annotations

from .it_config import ITConfig, get_instance


class UrlBuilder:
    def __init__(self, cfg: ITConfig):
        self.cfg = cfg

    def token_login_url(self) -> str:
        return self.cfg.base_url + "/identity/v3/auth/tokens"

    def aks_list_url(self, user_id: str) -> str:
        return self.cfg.base_url + "/identity/v3/credentials?userId=" + user_id + "&type=ec2"

    def types_url(self, tenant_id: str) -> str:
        return self.cfg.base_url + self.cfg.tenant_port + "/" + tenant_id + "/types"

    def add_backend_url(self, tenant_id: str) -> str:
        return self.cfg.base_url + self.cfg.tenant_port + "/" + tenant_id + "/backends"

    def create_bucket_url(self, bucket_name: str) -> str:
        return self.cfg.base_url + self.cfg.port + "/" + bucket_name

    def list_bucket_url(self) -> str:
        return self.cfg.base_url + self.cfg.port + "/"


# Module-level shortcuts over the process-wide config.

def token_login_url() -> str:
    return UrlBuilder(get_instance()).token_login_url()


def aks_list_url(user_id: str) -> str:
    return UrlBuilder(get_instance()).aks_list_url(user_id)


def types_url(tenant_id: str) -> str:
    return UrlBuilder(get_instance()).types_url(tenant_id)


def add_backend_url(tenant_id: str) -> str:
    return UrlBuilder(get_instance()).add_backend_url(tenant_id)


def create_bucket_url(bucket_name: str) -> str:
    return UrlBuilder(get_instance()).create_bucket_url(bucket_name)


def list_bucket_url() -> str:
    return UrlBuilder(get_instance()).list_bucket_url()
