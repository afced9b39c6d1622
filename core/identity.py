import hashlib
import uuid


def make_id(url: str, title: str) -> str:
    """
    Content-addressed article id: md5 of the url, else the title.
    With neither, the id is random and the article can't be deduplicated.
    """
    basis = url or title or uuid.uuid4().hex
    return hashlib.md5(basis.encode("utf-8")).hexdigest()
