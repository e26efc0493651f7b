def normalize_comment(comment):
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "user_id": comment.user_id,
        "author_name": comment.author.display_name if comment.author else None,
        "content": comment.content,
        "created_at": comment.created_at.isoformat(),
    }
