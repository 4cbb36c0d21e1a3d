"""Draft/live publishing: commands and handler."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.menu.menu_item import MenuItem
from shared.cache import get_cache

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="MenuItem")
class PublishDraftItems:
    """Make the given draft items live."""

    menu_item_ids: Text(required=True)  # JSON list of ids


@catalogue.command(part_of="MenuItem")
class CopyLiveToDraft:
    """Replace every draft with a fresh copy of the live menu."""

    requested_by: Identifier()


@catalogue.command_handler(part_of=MenuItem)
class PublishingHandler:
    @handle(PublishDraftItems)
    def publish_draft_items(self, command):
        ids = json.loads(command.menu_item_ids) if isinstance(command.menu_item_ids, str) else command.menu_item_ids
        repo = current_domain.repository_for(MenuItem)

        published = 0
        for menu_item_id in ids:
            item = repo.get(menu_item_id)
            if item.is_draft:
                item.publish()
                repo.add(item)
                published += 1

        get_cache().clear_user_menus()
        logger.info("Draft items published", count=published)
        return published

    @handle(CopyLiveToDraft)
    def copy_live_to_draft(self, command):
        repo = current_domain.repository_for(MenuItem)
        live = repo._dao.query.filter(is_draft=False).all().items
        if not live:
            return 0

        for draft in repo._dao.query.filter(is_draft=True).all().items:
            repo._dao.delete(draft)

        for item in live:
            repo.add(item.draft_copy())

        logger.info("Live menu copied to drafts", count=len(live))
        return len(live)
