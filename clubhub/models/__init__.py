"""Table models. Importing this package registers every table on the metadata."""

from clubhub.models.account import Account, AccountRole, AccountStatus
from clubhub.models.announcement import Announcement, AnnouncementComment, AnnouncementLike
from clubhub.models.contact import ContactMessage
from clubhub.models.event import Event, NewsArticle
from clubhub.models.media import GalleryItem, LeadershipProfile, Report, Resource
from clubhub.models.member import Member
from clubhub.models.setting import FeatureFlag, SystemSetting

__all__ = [
    "Account",
    "AccountRole",
    "AccountStatus",
    "Announcement",
    "AnnouncementComment",
    "AnnouncementLike",
    "ContactMessage",
    "Event",
    "FeatureFlag",
    "GalleryItem",
    "LeadershipProfile",
    "Member",
    "NewsArticle",
    "Report",
    "Resource",
    "SystemSetting",
]
