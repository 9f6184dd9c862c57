"""Report write operations.

Handlers return the live events to publish; the caller delivers them after
the write has been committed.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from src.framework.application import Command, CommandHandler
from src.metro_bc.crowd.aggregator import CrowdEstimate
from src.metro_bc.crowd.crowd_service import CrowdService
from src.metro_bc.live.domain.publisher import LiveEvent, LiveFeedPublisher
from src.metro_bc.report.domain.entities import CrowdLevel, Report
from src.metro_bc.report.infrastructure.repositories import ReportRepository
from src.metro_bc.shared.domain.exceptions import ReportNotFoundError, ReportOwnershipError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitReportCommand(Command):
    station_id: str
    level: str  # Any accepted synonym
    user_id: str
    remarks: str = ""
    photo: Optional[str] = None


@dataclass(frozen=True)
class LikeReportCommand(Command):
    report_id: str


@dataclass(frozen=True)
class DeleteReportCommand(Command):
    report_id: str
    user_id: str


@dataclass(frozen=True)
class SubmitReportResult:
    report: Report
    estimate: CrowdEstimate
    events: List[LiveEvent] = field(default_factory=list)


@dataclass(frozen=True)
class LikeReportResult:
    report: Report
    events: List[LiveEvent] = field(default_factory=list)


class SubmitReportCommandHandler(CommandHandler[SubmitReportCommand, SubmitReportResult]):
    def __init__(
        self,
        report_repository: ReportRepository,
        crowd_service: CrowdService,
        publisher: LiveFeedPublisher,
    ):
        self.report_repository = report_repository
        self.crowd_service = crowd_service
        self.publisher = publisher

    def handle(self, command: SubmitReportCommand) -> SubmitReportResult:
        """Store a report and recompute its station's estimate.

        Raises:
            InvalidCrowdLevelError: if the level label is unknown
        """
        level = CrowdLevel.normalize(command.level)
        report = self.report_repository.add(
            station_id=command.station_id,
            level=level,
            user_id=command.user_id,
            remarks=command.remarks,
            photo=command.photo,
        )
        logger.info(f"Report {report.id} saved for {report.station_id} ({level.value})")

        estimate = self.crowd_service.estimate_for_station(report.station_id)
        return SubmitReportResult(
            report=report,
            estimate=estimate,
            events=self.publisher.report_created(report, estimate),
        )


class LikeReportCommandHandler(CommandHandler[LikeReportCommand, LikeReportResult]):
    def __init__(self, report_repository: ReportRepository, publisher: LiveFeedPublisher):
        self.report_repository = report_repository
        self.publisher = publisher

    def handle(self, command: LikeReportCommand) -> LikeReportResult:
        report = self.report_repository.increment_likes(command.report_id)
        if report is None:
            raise ReportNotFoundError(command.report_id)

        return LikeReportResult(report=report, events=self.publisher.report_liked(report))


class DeleteReportCommandHandler(CommandHandler[DeleteReportCommand, None]):
    def __init__(self, report_repository: ReportRepository):
        self.report_repository = report_repository

    def handle(self, command: DeleteReportCommand) -> None:
        """Delete a report on behalf of its owner.

        Raises:
            ReportNotFoundError: unknown report id
            ReportOwnershipError: the user does not own the report
        """
        report = self.report_repository.get_report(command.report_id)
        if report is None:
            raise ReportNotFoundError(command.report_id)
        if report.user_id != command.user_id:
            raise ReportOwnershipError(command.report_id, command.user_id)

        self.report_repository.delete(command.report_id)
        logger.info(f"Report {command.report_id} deleted by owner {command.user_id}")
