"""
Shared server payloads for endpoint and repository tests.

Each payload is a valid POST body; INVALID_PAYLOADS pairs a body with the field
errors the validator must report for it.
"""

WEB_SERVER = {"fqdn": "web01.example.com", "ip": "10.0.0.10", "tags": ["web", "prod"]}
DB_SERVER = {"fqdn": "db01.example.com", "ip": "10.0.0.20", "tags": ["db", "prod"]}
IPV6_SERVER = {"fqdn": "edge01.example.com", "ip": "2001:db8::1", "tags": ["edge"]}

VALID_PAYLOADS = [WEB_SERVER, DB_SERVER, IPV6_SERVER]

INVALID_PAYLOADS = [
    ({}, {"ip": "must be provided", "fqdn": "must be provided", "tags": "must be provided"}),
    ({"fqdn": "a.example.com", "ip": "10.0.0.1"}, {"tags": "must be provided"}),
    ({"fqdn": "a.example.com", "ip": "10.0.0.1", "tags": []}, {"tags": "must be provided"}),
    ({"fqdn": "a.example.com", "ip": "300.1.1.1", "tags": ["web"]}, {"ip": "must be a valid IP address"}),
    ({"fqdn": "a.example.com", "ip": "not-an-ip", "tags": ["web"]}, {"ip": "must be a valid IP address"}),
    ({"ip": "10.0.0.1", "tags": ["web"]}, {"fqdn": "must be provided"}),
]
