"""Unit tests for the RBAC repository domain probe."""

from unittest.mock import Mock

from rbac.infrastructure.observability import DefaultRepositoryProbe


class TestDefaultRepositoryProbe:
    def test_creates_with_default_logger(self):
        """Test that probe can be created without providing a logger."""
        probe = DefaultRepositoryProbe()
        assert probe._logger is not None

    def test_accepts_custom_logger(self):
        custom_logger = Mock()
        probe = DefaultRepositoryProbe(logger=custom_logger)
        assert probe._logger is custom_logger


class TestRowSaved:
    def test_event_named_after_entity(self):
        mock_logger = Mock()
        probe = DefaultRepositoryProbe(logger=mock_logger)

        probe.row_saved("user", 7, created=True)

        mock_logger.debug.assert_called_once()
        call_args = mock_logger.debug.call_args
        assert call_args[0][0] == "user_saved"
        assert call_args[1]["row_id"] == 7
        assert call_args[1]["created"] is True


class TestDuplicateRejected:
    def test_logs_warning_with_field(self):
        mock_logger = Mock()
        probe = DefaultRepositoryProbe(logger=mock_logger)

        probe.duplicate_rejected("user", "email", "alice@example.com")

        mock_logger.warning.assert_called_once()
        call_args = mock_logger.warning.call_args
        assert call_args[0][0] == "duplicate_user_email"
        assert call_args[1]["value"] == "alice@example.com"


class TestRowDeleted:
    def test_logs_removed_dependents(self):
        mock_logger = Mock()
        probe = DefaultRepositoryProbe(logger=mock_logger)

        probe.row_deleted("group", 3, memberships_removed=2, permissions_removed=1)

        mock_logger.info.assert_called_once_with(
            "group_deleted",
            row_id=3,
            memberships_removed=2,
            permissions_removed=1,
        )

    def test_dependents_default_to_zero(self):
        mock_logger = Mock()
        probe = DefaultRepositoryProbe(logger=mock_logger)

        probe.row_deleted("permission", 4)

        call_args = mock_logger.info.call_args
        assert call_args[1]["memberships_removed"] == 0
        assert call_args[1]["permissions_removed"] == 0


class TestRowNotFound:
    def test_logs_debug(self):
        mock_logger = Mock()
        probe = DefaultRepositoryProbe(logger=mock_logger)

        probe.row_not_found("resource", 12)

        mock_logger.debug.assert_called_once()
        assert mock_logger.debug.call_args[0][0] == "resource_not_found"
