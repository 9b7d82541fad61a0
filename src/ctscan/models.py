"""Domain models used across the pipeline."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

Label = Literal["bullish", "bearish", "neutral"]


class ListSource(BaseModel):
    name: str
    url: str


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str
    display_name: str = ""
    text: str
    timestamp: datetime | None = None
    likes: int = Field(default=0, ge=0)
    retweets: int = Field(default=0, ge=0)
    replies: int = Field(default=0, ge=0)
    bookmarks: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    source_url: str = ""
    origin: Literal["direct", "mirror"]
    list_tag: str = ""


class ScrapeBatch(BaseModel):
    posts: list[Post] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    lists_succeeded: int = 0
    lists_failed: int = 0
    produced_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def lists_attempted(self) -> int:
        return self.lists_succeeded + self.lists_failed


class Engagement(BaseModel):
    likes: int = 0
    retweets: int = 0
    views: int = 0
    bookmarks: int = 0

    @property
    def total(self) -> int:
        """Likes plus retweets."""
        return self.likes + self.retweets

    @property
    def weighted(self) -> int:
        """Retweets count three times a like."""
        return self.likes + 3 * self.retweets


class Quote(BaseModel):
    author: str
    text: str
    sentiment: float
    engagement: int = 0  # likes + retweets


class PostAnalysis(BaseModel):
    post: Post
    text: str
    sentiment: float
    label: Label
    tokens: tuple[str, ...] = ()
    narratives: tuple[str, ...] = ()
    engagement: Engagement = Field(default_factory=Engagement)

    @property
    def author(self) -> str:
        return self.post.author


class TokenStat(BaseModel):
    token: str
    mention_count: int = 0
    bullish_count: int = 0
    bearish_count: int = 0
    neutral_count: int = 0
    sample_quotes: list[Quote] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sentiment(self) -> float:
        if not self.mention_count:
            return 0.0
        return (self.bullish_count - self.bearish_count) / self.mention_count


class NarrativeStat(BaseModel):
    name: str
    mention_count: int = 0
    average_sentiment: float = 0.0
    sample_quotes: list[Quote] = Field(default_factory=list)


class SentimentAggregate(BaseModel):
    total_posts: int = 0
    average_sentiment: float = 0.0
    overall_label: Label = "neutral"
    token_stats: dict[str, TokenStat] = Field(default_factory=dict)
    narrative_stats: dict[str, NarrativeStat] = Field(default_factory=dict)
    keyword_frequency: dict[str, int] = Field(default_factory=dict)
    per_post_analysis: list[PostAnalysis] = Field(default_factory=list)


# ── Trend report ──────────────────────────────────────────────────────────


class OverallSentiment(BaseModel):
    score: float = 0.0
    label: Label = "neutral"


class NarrativeTrend(BaseModel):
    narrative: str
    mention_count: int
    average_sentiment: float
    label: Label
    sample_quotes: list[Quote] = Field(default_factory=list)


class TokenTrend(BaseModel):
    token: str
    mentions: int
    bullish_count: int
    bearish_count: int
    neutral_count: int
    sentiment: float
    label: Label
    top_quotes: list[Quote] = Field(default_factory=list)


class NotablePost(BaseModel):
    author: str
    text: str
    sentiment: float
    label: Label
    tokens: tuple[str, ...] = ()
    narratives: tuple[str, ...] = ()
    engagement: Engagement = Field(default_factory=Engagement)
    is_kol: bool = False


class ConsensusAnalysis(BaseModel):
    overall_bias: Label = "neutral"
    average_sentiment: float = 0.0
    consensus_count: int = 0
    contrarian_count: int = 0
    top_consensus: list[Quote] = Field(default_factory=list)
    top_contrarian: list[Quote] = Field(default_factory=list)


class KeywordCount(BaseModel):
    word: str
    count: int


class TrendReport(BaseModel):
    generated_at: datetime
    total_posts: int = 0
    overall_sentiment: OverallSentiment = Field(default_factory=OverallSentiment)
    trending_narratives: list[NarrativeTrend] = Field(default_factory=list)
    token_trends: list[TokenTrend] = Field(default_factory=list)
    notable_posts: list[NotablePost] = Field(default_factory=list)
    consensus_analysis: ConsensusAnalysis = Field(default_factory=ConsensusAnalysis)
    top_keywords: list[KeywordCount] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


# ── Pipeline output ───────────────────────────────────────────────────────


class ScrapeSummary(BaseModel):
    total_posts: int = 0
    lists_attempted: int = 0
    lists_succeeded: int = 0
    lists_failed: int = 0
    produced_at: datetime | None = None


class PipelineResult(BaseModel):
    module: str = "ct_scanner"
    version: str
    generated_at: datetime
    warnings: list[str] = Field(default_factory=list)
    scrape_summary: ScrapeSummary = Field(default_factory=ScrapeSummary)
    sentiment: SentimentAggregate = Field(default_factory=SentimentAggregate)
    trends: TrendReport
    execution_time_ms: int = 0
