import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_secret_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "error": "secret: hunter2"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "hunter2" not in result["error"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.placement.state", "order_id": 7, "state": "COMMITTED"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_id"] == 7
        assert result["state"] == "COMMITTED"
