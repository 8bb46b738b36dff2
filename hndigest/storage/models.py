from pydantic import BaseModel, ConfigDict, Field


class NewsItem(BaseModel):
    # strict: "5" is not an int, a wrong-typed field rejects the whole item
    model_config = ConfigDict(frozen=True, strict=True)

    id: int = 0
    title_ja: str = Field(default="", alias="titleJa")
    url: str = ""
    score: int = 0
    rank: int = 0  # assigned by the ranker, the source value is ignored
    comment_summary_html: str = Field(default="", alias="commentSummaryHtml")
