"""Tests for deletion report schemas."""

from rfi_tracker.schemas.deletion import (
    ClientDeletionReport,
    DeletionImpact,
    FileDeletionResult,
    ProjectDeletedRecords,
    ProjectDeletionReport,
    RFIDeletedRecords,
    RFIDeletionReport,
    SoftDeletionResult,
    UserAffectedRecords,
    UserDeletionReport,
)


class TestDeletionReports:
    """Test report folding and summaries."""

    def test_record_file_outcomes(self):
        """Test that successes and failures land in separate lists."""
        report = RFIDeletionReport(rfi_id="1", rfi_number="P-1")

        report.record_file(FileDeletionResult(stored_name="a.pdf", deleted=True))
        report.record_file(FileDeletionResult(stored_name="b.pdf", deleted=False, error="nope"))

        assert report.deleted_files == ["a.pdf"]
        assert report.file_errors == ["nope"]
        assert report.success is True
        assert report.summary() == (
            "RFI P-1 deleted: 0 response(s), 0 attachment(s), 1 file(s) removed, 1 file warning(s)"
        )

    def test_project_folds_rfi_records(self):
        """Test that project totals add up nested RFI deletions."""
        report = ProjectDeletionReport(project_id="p", project_name="Tower")
        for _ in range(2):
            rfi = RFIDeletionReport(
                rfi_id="r",
                rfi_number="T-1",
                deleted_files=["x.pdf"],
                deleted_records=RFIDeletedRecords(rfi=1, attachments=1, responses=2),
            )
            report.absorb_files(rfi)
            report.deleted_records.add_rfi(rfi.deleted_records)

        assert report.deleted_records.rfis == 2
        assert report.deleted_records.attachments == 2
        assert report.deleted_records.responses == 4
        assert report.deleted_files == ["x.pdf", "x.pdf"]
        assert not report.has_file_errors

    def test_client_folds_projects(self):
        """Test that client totals add up nested project deletions."""
        report = ClientDeletionReport(client_id="c", client_name="Atlas")
        report.deleted_records.add_project(
            ProjectDeletedRecords(project=1, rfis=3, stakeholders=2, access_requests=1)
        )
        report.deleted_records.add_rfi(RFIDeletedRecords(rfi=1, email_logs=4))

        records = report.deleted_records
        assert (records.projects, records.rfis, records.stakeholders) == (1, 4, 2)
        assert records.access_requests == 1
        assert records.email_logs == 4

    def test_user_report_summary(self):
        """Test the user deletion confirmation line."""
        report = UserDeletionReport(
            user_id="u",
            user_name="Dana",
            user_email="dana@example.com",
            reassigned_to="v",
            affected_records=UserAffectedRecords(projects=1, rfis=2, responses=3),
        )

        assert report.summary() == (
            "User dana@example.com deleted: 1 project(s), 2 RFI(s), 3 response(s) reassigned to v"
        )

    def test_impact_and_soft_result(self):
        """Test helper properties on preview and soft delete results."""
        impact = DeletionImpact(entity_type="RFI", entity_id="1", name="P-1", counts={"a": 2, "b": 3})
        assert impact.total == 5

        assert SoftDeletionResult(entity_type="RFI", entity_id="1").changed is False
        assert SoftDeletionResult(entity_type="RFI", entity_id="1", marked={"rfi": 1}).changed is True

    def test_json_serialization(self):
        """Test that reports serialize for API responses."""
        report = ProjectDeletionReport(project_id="p", project_name="Tower", file_errors=["gone"])

        data = report.model_dump()

        assert data["file_errors"] == ["gone"]
        assert data["deleted_records"]["project"] == 0
