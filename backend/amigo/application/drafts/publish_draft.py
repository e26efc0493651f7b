from amigo.extensions import db
from amigo.models.post import Post
from amigo.models.post_draft import PostDraft
from amigo.application.posts.create_post import add_blog_post
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional
from .edit_draft import load_composer


def publish_draft(*, draft: PostDraft) -> Post:
    """
    Publish a composer session as a blog post.

    Responsibilities:
    - validation before any write
    - cover image promotion (inside the composer payload)
    - post creation and draft removal in one transaction, so a second
      publish of the same draft finds nothing to publish
    """
    composer = load_composer(draft)

    def persist(payload):
        with transactional():
            post = add_blog_post(author_id=draft.user_id, payload=payload)
            db.session.delete(draft)

            log_action(
                action="draft.publish",
                entity_type="draft",
                entity_id=draft.id,
                payload={"post_id": post.id},
            )
        return post

    return composer.publish(persist)
