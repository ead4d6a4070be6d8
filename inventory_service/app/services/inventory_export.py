"""Tag-grouped export of server records for Ansible.

`to_grouped_hosts` is the plain tag -> fqdn -> host vars view;
`to_ansible_inventory` nests each group under `hosts`, the layout Ansible's
YAML inventory plugin reads.
"""
from __future__ import annotations

from typing import Any, Iterable

import yaml

from inventory_service.app.constants import ANSIBLE_HOST_VAR, ANSIBLE_HOSTS_KEY
from inventory_service.app.domain.models import Server


def to_grouped_hosts(servers: Iterable[Server]) -> dict[str, dict[str, dict[str, str]]]:
    """A host appears under every tag it carries; a repeated fqdn in one group keeps the last record's ip."""
    groups: dict[str, dict[str, dict[str, str]]] = {}
    for server in servers:
        for tag in server.tags:
            groups.setdefault(tag, {})[server.fqdn] = {ANSIBLE_HOST_VAR: server.ip}
    return groups


def to_ansible_inventory(servers: Iterable[Server]) -> dict[str, Any]:
    return {group: {ANSIBLE_HOSTS_KEY: hosts} for group, hosts in to_grouped_hosts(servers).items()}


def dump_ansible_inventory(servers: Iterable[Server]) -> str:
    return yaml.safe_dump(to_ansible_inventory(servers), default_flow_style=False, sort_keys=False)
