"""
Announcements and the comments/likes readers attach to them.

Ordering: priority rank ascending (urgent first), then newest publish date.
Unknown or missing priorities rank as ``normal``.

Ownership: comments and likes can be created by authenticated accounts or by
guests, but only the authoring account may edit or delete them. A mismatch is
reported exactly like a missing row so non-owners learn nothing about
existence.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy import case, delete, func, or_
from sqlmodel import Session, select

from clubhub.core.errors import NotFoundError, ValidationError
from clubhub.core.logging import get_logger
from clubhub.models.account import Account
from clubhub.models.announcement import Announcement, AnnouncementComment, AnnouncementLike
from clubhub.models.base import utcnow
from clubhub.schemas.account import CurrentUser
from clubhub.services.collection_service import CollectionService, ensure_valid_id

logger = get_logger(__name__)

PRIORITY_RANK: Dict[str, int] = {"urgent": 0, "high": 1, "normal": 2, "low": 3}
DEFAULT_PRIORITY_RANK = PRIORITY_RANK["normal"]

OWNERSHIP_MESSAGE = "{label} not found or you do not have permission to {action} it"


def priority_rank(priority: Optional[str]) -> int:
    """Rank of ``priority``; lower ranks are shown first."""
    return PRIORITY_RANK.get(priority or "", DEFAULT_PRIORITY_RANK)


def announcement_ordering() -> list:
    """SQL ordering clauses matching ``priority_rank`` then newest first."""
    rank = case(PRIORITY_RANK, value=Announcement.priority, else_=DEFAULT_PRIORITY_RANK)
    return [rank.asc(), Announcement.publish_date.desc()]


@dataclass(frozen=True)
class AuthorSnapshot:
    """
    Author identity copied onto a comment or like at write time.

    Deliberately stale: later edits to the account do not rewrite history.
    """

    user_id: Optional[str]
    user_name: str
    user_email: str

    @classmethod
    def from_user(cls, user: CurrentUser) -> "AuthorSnapshot":
        if user.first_name and user.last_name:
            name = f"{user.first_name} {user.last_name}"
        else:
            name = user.username
        return cls(user_id=user.id, user_name=name, user_email=user.email)

    @classmethod
    def for_guest(cls, name: Optional[str], email: Optional[str]) -> "AuthorSnapshot":
        """
        Guest identity supplied by the caller. Lower trust: nothing verifies it.

        Raises:
            ValidationError: Name or email missing
        """
        name = (name or "").strip()
        email = (email or "").strip()
        missing = [label for label, value in (("userName", name), ("userEmail", email)) if not value]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        return cls(user_id=None, user_name=name, user_email=email)


class AnnouncementService(CollectionService[Announcement]):
    def __init__(self, session: Session):
        super().__init__(
            session,
            Announcement,
            "announcement",
            search_fields=("title", "content"),
            required_fields=("title", "content"),
        )

    def list_public(self, visibility: Optional[str] = None, limit: Optional[int] = None, offset: int = 0):
        """Published announcements that have not expired, in display order."""
        now = utcnow()
        conditions = [
            or_(Announcement.expiry_date.is_(None), Announcement.expiry_date > now),
        ]
        return self.list(
            filters={"status": "published", "visibility": visibility},
            order_by=announcement_ordering(),
            limit=limit,
            offset=offset,
            conditions=conditions,
        )

    def creator_names(self, announcements: List[Announcement]) -> Dict[str, str]:
        """Map creator account id to display name for the given rows."""
        ids = {a.created_by for a in announcements if a.created_by}
        if not ids:
            return {}
        accounts = self.session.exec(select(Account).where(Account.id.in_(ids)))
        return {account.id: account.display_name for account in accounts}

    def delete_with_children(self, announcement_id: str) -> None:
        announcement = self.get_or_404(announcement_id)
        connection = self.session.connection()
        connection.execute(delete(AnnouncementComment).where(AnnouncementComment.announcement_id == announcement.id))
        connection.execute(delete(AnnouncementLike).where(AnnouncementLike.announcement_id == announcement.id))
        self.session.delete(announcement)
        self._commit()
        logger.info(f"Deleted announcement {announcement_id} with its comments and likes")

    def stats(self) -> dict:
        counts = dict(
            self.session.exec(select(Announcement.status, func.count()).group_by(Announcement.status)).all()
        )
        by_priority = dict(
            self.session.exec(select(Announcement.priority, func.count()).group_by(Announcement.priority)).all()
        )
        return {
            "total": sum(counts.values()),
            "published": counts.get("published", 0),
            "draft": counts.get("draft", 0),
            "archived": counts.get("archived", 0),
            "byPriority": {key or "normal": value for key, value in by_priority.items()},
        }


class CommentService:
    """Comments on announcements with author ownership."""

    def __init__(self, session: Session):
        self.session = session
        self.announcements = AnnouncementService(session)
        self.comments = CollectionService(
            session,
            AnnouncementComment,
            "comment",
            required_fields=("comment_text",),
        )

    def list_approved(self, announcement_id: str) -> List[AnnouncementComment]:
        ensure_valid_id(announcement_id, "announcement ID")
        rows, _ = self.comments.list(
            filters={"announcement_id": announcement_id, "status": "approved"},
            order_by=[AnnouncementComment.created_at.desc()],
        )
        return rows

    def stats(self, announcement_id: str) -> dict:
        ensure_valid_id(announcement_id, "announcement ID")
        statement = (
            select(AnnouncementComment.status, func.count())
            .where(AnnouncementComment.announcement_id == announcement_id)
            .group_by(AnnouncementComment.status)
        )
        counts = dict(self.session.exec(statement).all())
        return {
            "total": sum(counts.values()),
            "approved": counts.get("approved", 0),
            "pending": counts.get("pending", 0),
        }

    def create(self, announcement_id: str, text: str, author: AuthorSnapshot) -> AnnouncementComment:
        self.announcements.get_or_404(announcement_id)
        return self.comments.create(
            {
                "announcement_id": announcement_id,
                "comment_text": text,
                "user_id": author.user_id,
                "user_name": author.user_name,
                "user_email": author.user_email,
                # Guest comments wait for moderation.
                "status": "approved" if author.user_id else "pending",
            }
        )

    def _owned(self, comment_id: str, caller: Optional[CurrentUser], action: str) -> AnnouncementComment:
        ensure_valid_id(comment_id, "comment ID")
        not_found = NotFoundError(OWNERSHIP_MESSAGE.format(label="Comment", action=action))
        if caller is None:
            raise not_found
        statement = select(AnnouncementComment).where(
            AnnouncementComment.id == comment_id,
            AnnouncementComment.user_id == caller.id,
        )
        comment = self.session.exec(statement).first()
        if comment is None:
            raise not_found
        return comment

    def update(self, comment_id: str, text: str, caller: Optional[CurrentUser]) -> AnnouncementComment:
        comment = self._owned(comment_id, caller, "edit")
        return self.comments.update(comment.id, {"comment_text": text})

    def delete(self, comment_id: str, caller: Optional[CurrentUser]) -> None:
        comment = self._owned(comment_id, caller, "delete")
        self.comments.delete(comment.id)


class LikeService:
    """Likes keyed by account (authenticated) or email (guest)."""

    def __init__(self, session: Session):
        self.session = session
        self.announcements = AnnouncementService(session)
        self.likes = CollectionService(session, AnnouncementLike, "like")

    def count(self, announcement_id: str) -> int:
        ensure_valid_id(announcement_id, "announcement ID")
        return self.likes.count(AnnouncementLike.announcement_id == announcement_id)

    def _find(self, announcement_id: str, author: AuthorSnapshot) -> Optional[AnnouncementLike]:
        statement = select(AnnouncementLike).where(AnnouncementLike.announcement_id == announcement_id)
        if author.user_id:
            statement = statement.where(AnnouncementLike.user_id == author.user_id)
        else:
            statement = statement.where(
                AnnouncementLike.user_id.is_(None),
                AnnouncementLike.user_email == author.user_email,
            )
        return self.session.exec(statement).first()

    def has_liked(self, announcement_id: str, caller: Optional[CurrentUser], email: Optional[str]) -> bool:
        ensure_valid_id(announcement_id, "announcement ID")
        if caller is not None:
            return self._find(announcement_id, AuthorSnapshot.from_user(caller)) is not None
        if not email:
            return False
        return self._find(announcement_id, AuthorSnapshot(None, "", email)) is not None

    def details(self, announcement_id: str) -> List[AnnouncementLike]:
        ensure_valid_id(announcement_id, "announcement ID")
        rows, _ = self.likes.list(
            filters={"announcement_id": announcement_id},
            order_by=[AnnouncementLike.created_at.desc()],
        )
        return rows

    def toggle(self, announcement_id: str, author: AuthorSnapshot) -> bool:
        """
        Like, or unlike if the author already liked the announcement.

        Two concurrent toggles by the same author can both observe "not liked"
        and insert twice; there is no unique constraint across guest emails.

        Returns:
            True if the announcement is now liked
        """
        ensure_valid_id(announcement_id, "announcement ID")
        self.announcements.get_or_404(announcement_id)

        existing = self._find(announcement_id, author)
        if existing is not None:
            self.likes.delete(existing.id)
            return False

        self.likes.create(
            {
                "announcement_id": announcement_id,
                "user_id": author.user_id,
                "user_name": author.user_name,
                "user_email": author.user_email,
            }
        )
        return True

    def delete(self, like_id: str, caller: Optional[CurrentUser]) -> None:
        ensure_valid_id(like_id, "like ID")
        not_found = NotFoundError(OWNERSHIP_MESSAGE.format(label="Like", action="remove"))
        if caller is None:
            raise not_found
        statement = select(AnnouncementLike).where(
            AnnouncementLike.id == like_id,
            AnnouncementLike.user_id == caller.id,
        )
        like = self.session.exec(statement).first()
        if like is None:
            raise not_found
        self.likes.delete(like.id)
