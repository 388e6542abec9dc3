"""
Tag service.

Tags form one shared vocabulary: names are unique across all users and
matched case-sensitively, so two users tagging "Biology" share a tag row.
"""
import logging
from typing import Iterable, List

from sqlmodel import Session, select

from swipenotes.core.exceptions import ValidationError
from swipenotes.models.models import Card, CardTag, Tag

logger = logging.getLogger(__name__)

MAX_TAGS_PER_CARD = 10


def normalize_tag_names(names: Iterable[str]) -> List[str]:
    """
    Trim names, drop blanks and duplicates, keep first-seen order.

    Raises:
        ValidationError: If more than MAX_TAGS_PER_CARD distinct names remain
    """
    result: List[str] = []
    for name in names:
        name = name.strip()
        if name and name not in result:
            result.append(name)
    if len(result) > MAX_TAGS_PER_CARD:
        raise ValidationError(f"A card can have at most {MAX_TAGS_PER_CARD} tags, got {len(result)}")
    return result


def get_or_create_tag(session: Session, name: str) -> Tag:
    """Return the tag with this exact name, creating it if needed. Does not commit."""
    tag = session.exec(select(Tag).where(Tag.name == name)).first()
    if tag:
        return tag
    tag = Tag(name=name)
    session.add(tag)
    session.flush()
    return tag


def set_card_tags(session: Session, card: Card, names: Iterable[str]) -> List[Tag]:
    """
    Replace the tag links of a card. Does not commit.

    Returns:
        The tags now linked to the card, in the given order
    """
    tag_names = normalize_tag_names(names)
    existing_links = session.exec(select(CardTag).where(CardTag.card_id == card.id)).all()
    for link in existing_links:
        session.delete(link)
    session.flush()
    tags = [get_or_create_tag(session, name) for name in tag_names]
    for tag in tags:
        session.add(CardTag(card_id=card.id, tag_id=tag.id))
    session.flush()
    session.expire(card, ["tags"])
    return tags


def list_tag_names(session: Session) -> List[str]:
    """All tag names in the shared vocabulary, sorted."""
    return list(session.exec(select(Tag.name).order_by(Tag.name)).all())


def get_tags_for_user(session: Session, user_id: int) -> List[Tag]:
    """Tags linked to at least one of the user's cards."""
    query = (
        select(Tag)
        .join(CardTag, CardTag.tag_id == Tag.id)
        .join(Card, Card.id == CardTag.card_id)
        .where(Card.user_id == user_id)
        .distinct()
        .order_by(Tag.name)
    )
    return list(session.exec(query).all())


def find_unused_tags(session: Session) -> List[Tag]:
    """Tags not linked to any card of any user."""
    used_tag_ids = select(CardTag.tag_id)
    query = select(Tag).where(Tag.id.not_in(used_tag_ids))  # type: ignore[union-attr]
    return list(session.exec(query).all())


def delete_unused_tags(session: Session) -> int:
    """
    Delete every tag that no card links to.

    Returns:
        The number of tags deleted
    """
    unused_tags = find_unused_tags(session)
    for tag in unused_tags:
        session.delete(tag)
    session.commit()

    if unused_tags:
        logger.info(f"Deleted {len(unused_tags)} unused tag(s)")
    return len(unused_tags)
