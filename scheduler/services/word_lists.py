import structlog

from ..data import repos
from ..data.models import WordList
from ..errors import NotFound

logger = structlog.get_logger()


def create_word_list(user_id, name, description=None, is_public=False):
    word_list = WordList.objects.create(
        user_id=user_id, name=name, description=description, is_public=is_public
    )
    logger.info("word_list_created", user_id=str(user_id), word_list_id=str(word_list.pk))
    return word_list


def list_word_lists(user_id):
    return list(repos.visible_word_lists(user_id).order_by("-created_at"))


def get_word_list(user_id, word_list_id):
    """Own or public list, with its cards prefetched."""
    word_list = (repos.visible_word_lists(user_id)
                 .prefetch_related("cards")
                 .filter(pk=word_list_id)
                 .first())
    if word_list is None:
        logger.warning("word_list_not_found", user_id=str(user_id), word_list_id=str(word_list_id))
        raise NotFound("Word list not found")
    return word_list


def _owned(user_id, word_list_id):
    word_list = repos.get_owned_word_list(user_id, word_list_id)
    if word_list is None:
        logger.warning("word_list_not_found", user_id=str(user_id), word_list_id=str(word_list_id))
        raise NotFound("Word list not found")
    return word_list


def update_word_list(user_id, word_list_id, **changes):
    word_list = _owned(user_id, word_list_id)
    fields = [key for key in ("name", "description", "is_public") if key in changes]
    for key in fields:
        setattr(word_list, key, changes[key])
    if fields:
        word_list.save(update_fields=[*fields, "updated_at"])
    logger.info("word_list_updated", user_id=str(user_id), word_list_id=str(word_list_id), fields=fields)
    return word_list


def delete_word_list(user_id, word_list_id):
    _owned(user_id, word_list_id).delete()
    logger.info("word_list_deleted", user_id=str(user_id), word_list_id=str(word_list_id))
