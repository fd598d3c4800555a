from conftest import DEPLOYER, ISSUER, STRANGER, auth_headers

BASE = "/api/v1"

PAYLOAD = {
    "recipient_name": "Alice",
    "course_name": "Go101",
    "issuing_institution": "TechU",
    "certificate_hash": "hash1",
}


def _issue(client, identity=DEPLOYER, **overrides):
    body = {**PAYLOAD, **overrides}
    return client.post(f"{BASE}/certificates", json=body, headers=auth_headers(identity))


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_registry_info(client):
    r = client.get(f"{BASE}/registry")
    assert r.status_code == 200
    assert r.json() == {"owner": DEPLOYER, "total_certificates": 0}


def test_issue_requires_bearer_token(client):
    r = client.post(f"{BASE}/certificates", json=PAYLOAD)
    assert r.status_code == 401
    r = client.post(f"{BASE}/certificates", json=PAYLOAD, headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401


def test_issue_verify_and_details(client, clock):
    r = _issue(client)
    assert r.status_code == 201, r.text
    cert_id = r.json()["certificate_id"]
    assert r.json()["issue_date"] == clock.now

    v = client.get(f"{BASE}/certificates/{cert_id}/verify").json()
    assert v == {
        "is_valid": True,
        "recipient_name": "Alice",
        "course_name": "Go101",
        "issuing_institution": "TechU",
        "issue_date": clock.now,
    }
    d = client.get(f"{BASE}/certificates/{cert_id}").json()
    assert d["issuer"] == DEPLOYER
    assert d["certificate_hash"] == "hash1"
    assert client.get(f"{BASE}/certificates/{cert_id}/exists").json()["exists"] is True
    assert client.get(f"{BASE}/certificates/{cert_id}/hash").json()["certificate_hash"] == "hash1"
    assert client.get(f"{BASE}/registry").json()["total_certificates"] == 1


def test_unknown_certificate(client):
    unknown = "0x" + "12" * 32
    v = client.get(f"{BASE}/certificates/{unknown}/verify")
    assert v.status_code == 200
    assert v.json()["is_valid"] is False and v.json()["issue_date"] == 0
    assert client.get(f"{BASE}/certificates/{unknown}/exists").json()["exists"] is False

    r = client.get(f"{BASE}/certificates/{unknown}")
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"
    assert client.get(f"{BASE}/certificates/{unknown}/hash").status_code == 404


def test_error_envelope_for_registry_errors(client):
    assert _issue(client).status_code == 201
    dup = _issue(client)
    assert dup.status_code == 409
    assert dup.json()["code"] == "DUPLICATE_CERTIFICATE"
    assert set(dup.json()) == {"code", "message", "details"}

    empty = _issue(client, recipient_name="")
    assert empty.status_code == 422
    assert empty.json()["code"] == "INVALID_INPUT"

    forbidden = _issue(client, identity=STRANGER, recipient_name="Mallory")
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "UNAUTHORIZED"


def test_revoke_and_transfer(client):
    cert_id = _issue(client).json()["certificate_id"]

    r = client.post(f"{BASE}/certificates/{cert_id}/transfer", json={"new_recipient_name": "Alicia"},
                    headers=auth_headers(DEPLOYER))
    assert r.status_code == 200
    assert r.json()["recipient_name"] == "Alicia"

    r = client.post(f"{BASE}/certificates/{cert_id}/revoke", headers=auth_headers(DEPLOYER))
    assert r.status_code == 200
    assert r.json()["is_valid"] is False

    again = client.post(f"{BASE}/certificates/{cert_id}/revoke", headers=auth_headers(DEPLOYER))
    assert again.status_code == 409 and again.json()["code"] == "ALREADY_REVOKED"

    r = client.post(f"{BASE}/certificates/{cert_id}/transfer", json={"new_recipient_name": "Bob"},
                    headers=auth_headers(DEPLOYER))
    assert r.status_code == 409 and r.json()["code"] == "INVALID_STATE"


def test_issuer_management_flow(client):
    r = client.put(f"{BASE}/issuers/{ISSUER}", headers=auth_headers(STRANGER))
    assert r.status_code == 403

    r = client.put(f"{BASE}/issuers/{ISSUER}", headers=auth_headers(DEPLOYER))
    assert r.status_code == 200 and r.json() == {"issuer": ISSUER, "authorized": True}
    assert client.put(f"{BASE}/issuers/{ISSUER}", headers=auth_headers(DEPLOYER)).json()["code"] == "ALREADY_AUTHORIZED"

    assert client.get(f"{BASE}/issuers").json()["issuers"] == [DEPLOYER, ISSUER]
    assert client.get(f"{BASE}/issuers/{ISSUER}").json()["authorized"] is True

    cert_id = _issue(client, identity=ISSUER, recipient_name="Bob", course_name="Rust201").json()["certificate_id"]
    stats = client.get(f"{BASE}/issuers/{ISSUER}/stats").json()
    assert stats == {"issuer": ISSUER, "certificate_count": 1, "valid_certificate_count": 1}
    listed = client.get(f"{BASE}/issuers/{ISSUER}/certificates").json()
    assert listed == {"certificate_ids": [cert_id], "count": 1}
    by_course = client.get(f"{BASE}/issuers/{ISSUER}/certificates", params={"course_name": "Go101"}).json()
    assert by_course["count"] == 0

    owner_revoke = client.delete(f"{BASE}/issuers/{DEPLOYER}", headers=auth_headers(DEPLOYER))
    assert owner_revoke.status_code == 409 and owner_revoke.json()["code"] == "CANNOT_REVOKE_OWNER"

    assert client.delete(f"{BASE}/issuers/{ISSUER}", headers=auth_headers(DEPLOYER)).status_code == 204
    assert client.get(f"{BASE}/issuers").json()["issuers"] == [DEPLOYER]
    again = client.delete(f"{BASE}/issuers/{ISSUER}", headers=auth_headers(DEPLOYER))
    assert again.json()["code"] == "NOT_AUTHORIZED"
    assert client.get(f"{BASE}/certificates/{cert_id}").json()["recipient_name"] == "Bob"


def test_malformed_identity_is_invalid_input(client):
    r = client.put(f"{BASE}/issuers/not-an-address", headers=auth_headers(DEPLOYER))
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_INPUT"


def test_change_owner(client):
    r = client.put(f"{BASE}/registry/owner", json={"new_owner": ISSUER}, headers=auth_headers(STRANGER))
    assert r.status_code == 403

    r = client.put(f"{BASE}/registry/owner", json={"new_owner": ISSUER}, headers=auth_headers(DEPLOYER))
    assert r.status_code == 200
    assert r.json()["owner"] == ISSUER
    assert client.get(f"{BASE}/issuers/{ISSUER}").json()["authorized"] is False

    null = client.put(f"{BASE}/registry/owner", json={"new_owner": "0x" + "0" * 40}, headers=auth_headers(ISSUER))
    assert null.status_code == 422


def test_global_searches(client):
    a = _issue(client).json()["certificate_id"]
    b = _issue(client, recipient_name="Bob", issuing_institution="OtherU").json()["certificate_id"]

    r = client.get(f"{BASE}/certificates/by-institution", params={"institution": "TechU"})
    assert r.json() == {"certificate_ids": [a], "count": 1}
    r = client.get(f"{BASE}/certificates/by-recipient", params={"recipient_name": "Bob"})
    assert r.json()["certificate_ids"] == [b]
    r = client.get(f"{BASE}/certificates/by-recipient", params={"recipient_name": "bob"})
    assert r.json()["count"] == 0


def test_events_endpoint(client):
    cert_id = _issue(client).json()["certificate_id"]
    client.post(f"{BASE}/certificates/{cert_id}/revoke", headers=auth_headers(DEPLOYER))

    events = client.get(f"{BASE}/events").json()
    assert [e["name"] for e in events] == [
        "OwnershipTransferred", "IssuerAuthorized", "CertificateIssued", "CertificateRevoked",
    ]
    revoked = client.get(f"{BASE}/events", params={"name": "CertificateRevoked"}).json()
    assert revoked[0]["args"] == {"certificateId": cert_id}
    assert revoked[0]["key"] == cert_id
    assert revoked[0]["caller"] == DEPLOYER
