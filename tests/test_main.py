from loguru import logger

from plagiarism import main


class TestStartup:
    """Test startup logging of the entry point."""

    def test_missing_token_warning_describes_upstream_auth_failure(self, monkeypatch):
        monkeypatch.delenv("GOWINSTON_API_TOKEN", raising=False)
        monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: None)
        monkeypatch.setattr(main, "setup_logging", lambda level: None)

        messages = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
        try:
            main.main()
        finally:
            logger.remove(sink_id)

        warning = next(m for m in messages if "GOWINSTON_API_TOKEN" in m)
        assert "empty bearer token" in warning
        assert "authentication error" in warning
