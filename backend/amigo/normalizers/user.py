def normalize_user(user, *, followers=None, following=None, posts=None, private=False):
    data = {
        "id": user.id,
        "username": user.username,
        "display_name": user.display_name,
        "bio": user.bio or "",
    }

    if private:
        data["email"] = user.email

    if followers is not None:
        data["followers_count"] = followers
    if following is not None:
        data["following_count"] = following
    if posts is not None:
        data["posts_count"] = posts

    return data
