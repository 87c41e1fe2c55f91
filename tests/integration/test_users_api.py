"""
Integration tests for the signed-in user endpoints.
"""
from app.models.base.enums import ComplaintStatus
from tests.conftest import HOSTEL_DOMAIN_ID, IET_DOMAIN_ID


def test_domains_are_public_and_sorted(client):
    response = client.get("/api/users/domains")

    assert response.status_code == 200
    names = [d["name"] for d in response.json()["domains"]]
    assert names == sorted(names)
    assert set(names) == {"Hostel", "IET", "IM", "Design", "Council", "VC Office"}


def test_profile(client, hostel_admin, auth_headers):
    response = client.get("/api/users/profile", headers=auth_headers(hostel_admin))

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["id"] == hostel_admin.id
    assert user["role"] == "sub_admin"
    assert user["domainName"] == "Hostel"
    assert "passwordHash" not in user


def test_profile_requires_token(client):
    assert client.get("/api/users/profile").status_code == 401


def test_stats_follow_visibility(
    client, student, other_student, hostel_admin, super_admin, make_complaint, auth_headers
):
    make_complaint(student, HOSTEL_DOMAIN_ID)
    make_complaint(student, HOSTEL_DOMAIN_ID, status=ComplaintStatus.RESOLVED)
    make_complaint(other_student, IET_DOMAIN_ID, status=ComplaintStatus.IN_PROGRESS)

    student_stats = client.get("/api/users/stats", headers=auth_headers(student)).json()["stats"]
    admin_stats = client.get("/api/users/stats", headers=auth_headers(hostel_admin)).json()["stats"]
    super_stats = client.get("/api/users/stats", headers=auth_headers(super_admin)).json()["stats"]

    assert student_stats == {"total": 2, "pending": 1, "inProgress": 0, "resolved": 1, "rejected": 0}
    assert admin_stats["total"] == 2
    assert super_stats == {"total": 3, "pending": 1, "inProgress": 1, "resolved": 1, "rejected": 0}
