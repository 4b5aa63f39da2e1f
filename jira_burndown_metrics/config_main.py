import logging

from .calculators.buckets import DailyPointBucketsCalculator, WeeklyPointBucketsCalculator
from .calculators.changes import DailyChangesCalculator, WeeklyChangesCalculator
from .calculators.developers import DeveloperVelocityCalculator
from .calculators.history import SnapshotCalculator
from .calculators.open_items import OpenItemsCalculator
from .calculators.status import PointsByStatusCalculator
from .calculators.summary import SummaryCalculator
from .calculators.velocity import VelocityCalculator

CALCULATORS = (
    WeeklyPointBucketsCalculator,  # should come before velocity
    DailyPointBucketsCalculator,
    VelocityCalculator,
    PointsByStatusCalculator,
    DeveloperVelocityCalculator,
    OpenItemsCalculator,
    DailyChangesCalculator,  # both read snapshots from earlier runs
    WeeklyChangesCalculator,
    SummaryCalculator,  # needs velocity and changes
    SnapshotCalculator,
)

logger = logging.getLogger(__name__)
