from unittest.mock import patch


def test_unhandled_error_keeps_request_id(test_app_client):
    client, _ = test_app_client

    with patch(
        "backend.app.routers.profile.profile_service.list_profiles",
        side_effect=RuntimeError("database went away"),
    ), patch("backend.app.error_handlers.logger") as mock_logger:
        resp = client.get("/api/profile", headers={"X-Request-ID": "abc123"})

    assert resp.status_code == 500
    assert resp.json() == {"msg": "Server Error"}
    assert resp.headers["x-request-id"] == "abc123"

    mock_logger.exception.assert_called_once()
    assert mock_logger.exception.call_args.kwargs["request_id"] == "abc123"
    assert mock_logger.exception.call_args.kwargs["error_type"] == "RuntimeError"


def test_request_id_does_not_leak_between_requests(test_app_client):
    client, _ = test_app_client
    client.get("/health", headers={"X-Request-ID": "first"})

    with patch(
        "backend.app.routers.profile.profile_service.list_profiles",
        side_effect=RuntimeError("boom"),
    ):
        resp = client.get("/api/profile")

    assert resp.status_code == 500
    assert resp.headers["x-request-id"] != "first"
