"""Articles with an image gallery under ``images/articles/<title>/``."""

from realty_api.api.resource import build_router
from realty_api.models.article import Article
from realty_api.schemas.article import ArticleCreate, ArticleResponse
from realty_api.services.media import GALLERY, MediaSlot
from realty_api.services.resources import CONTAINS, ResourceConfig

articles = ResourceConfig(
    path="articles",
    model=Article,
    label="Article",
    plural="articles",
    create_schema=ArticleCreate,
    response_schema=ArticleResponse,
    natural_keys=(("title",),),
    includes=("images",),
    search_fields={"title": CONTAINS, "description": CONTAINS, "body": CONTAINS},
    media=(
        MediaSlot(
            field="images",
            attr="images",
            kind=GALLERY,
            directory="images/articles",
            required_on_create=True,
        ),
    ),
    media_key="title",
)

router = build_router(articles)
