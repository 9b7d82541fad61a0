"""Turn a sentiment aggregate into ranked narrative, token and KOL reports."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from ctscan.lexicon import KNOWN_KOLS
from ctscan.models import (
    ConsensusAnalysis,
    KeywordCount,
    Label,
    NarrativeTrend,
    NotablePost,
    OverallSentiment,
    PostAnalysis,
    Quote,
    SentimentAggregate,
    TokenTrend,
    TrendReport,
)
from ctscan.sentiment import LABEL_THRESHOLD, label_for

logger = logging.getLogger(__name__)

# ── Caps ───────────────────────────────────────────────────────────────────
_TOP_NARRATIVES = 10
_TOP_TOKENS = 25
_TOP_NOTABLE = 20
_TOP_STANCE = 5
_TOP_KEYWORDS = 20
_SAMPLES_PER_TREND = 3

# ── Notable-post engagement floor ──────────────────────────────────────────
_MIN_LIKES = 50
_MIN_RETWEETS = 20
_MIN_VIEWS = 10_000

# ── Consensus / contrarian bands ───────────────────────────────────────────
_CONTRARIAN_STRENGTH = 0.3
_CONSENSUS_BAND = 0.2

_NO_DATA_WARNING = "No post data available for trend analysis"


def is_kol(author: str) -> bool:
    return author.lower() in KNOWN_KOLS


def build_trending_narratives(agg: SentimentAggregate) -> list[NarrativeTrend]:
    """Most-discussed narratives first, with their first three sample quotes."""
    ranked = sorted(
        agg.narrative_stats.values(), key=lambda n: n.mention_count, reverse=True
    )
    return [
        NarrativeTrend(
            narrative=nar.name,
            mention_count=nar.mention_count,
            average_sentiment=nar.average_sentiment,
            label=label_for(nar.average_sentiment),
            sample_quotes=nar.sample_quotes[:_SAMPLES_PER_TREND],
        )
        for nar in ranked[:_TOP_NARRATIVES]
    ]


def _token_label(bullish: int, bearish: int) -> Label:
    if bullish > bearish:
        return "bullish"
    if bearish > bullish:
        return "bearish"
    return "neutral"


def build_token_trends(agg: SentimentAggregate) -> list[TokenTrend]:
    """Most-mentioned tokens first, with a bullish/bearish split."""
    ranked = sorted(
        agg.token_stats.values(), key=lambda t: t.mention_count, reverse=True
    )
    trends: list[TokenTrend] = []
    for stat in ranked[:_TOP_TOKENS]:
        top_quotes = sorted(stat.sample_quotes, key=lambda q: q.engagement, reverse=True)
        trends.append(
            TokenTrend(
                token=stat.token,
                mentions=stat.mention_count,
                bullish_count=stat.bullish_count,
                bearish_count=stat.bearish_count,
                neutral_count=stat.neutral_count,
                sentiment=round(stat.sentiment, 3),
                label=_token_label(stat.bullish_count, stat.bearish_count),
                top_quotes=top_quotes[:_SAMPLES_PER_TREND],
            )
        )
    return trends


def _is_high_engagement(analysis: PostAnalysis) -> bool:
    eng = analysis.engagement
    return (
        eng.likes >= _MIN_LIKES
        or eng.retweets >= _MIN_RETWEETS
        or eng.views >= _MIN_VIEWS
    )


def extract_notable_posts(agg: SentimentAggregate) -> list[NotablePost]:
    """KOL posts plus any post over the engagement floor, by weighted engagement."""
    candidates = [
        a
        for a in agg.per_post_analysis
        if is_kol(a.author) or _is_high_engagement(a)
    ]
    candidates.sort(key=lambda a: a.engagement.weighted, reverse=True)
    return [
        NotablePost(
            author=a.author,
            text=a.text,
            sentiment=a.sentiment,
            label=a.label,
            tokens=a.tokens,
            narratives=a.narratives,
            engagement=a.engagement,
            is_kol=is_kol(a.author),
        )
        for a in candidates[:_TOP_NOTABLE]
    ]


def classify_stance(sentiment: float, average: float) -> str | None:
    """Return ``"contrarian"``, ``"consensus"`` or None for a single post.

    Contrarian: the corpus leans one way and the post strongly the other.
    Consensus: the post is close to the average and not itself neutral.
    """
    if average > LABEL_THRESHOLD and sentiment < -_CONTRARIAN_STRENGTH:
        return "contrarian"
    if average < -LABEL_THRESHOLD and sentiment > _CONTRARIAN_STRENGTH:
        return "contrarian"
    if abs(sentiment - average) < _CONSENSUS_BAND and abs(sentiment) > LABEL_THRESHOLD:
        return "consensus"
    return None


def _stance_quotes(analyses: list[PostAnalysis]) -> list[Quote]:
    ranked = sorted(analyses, key=lambda a: a.engagement.total, reverse=True)
    return [
        Quote(
            author=a.author,
            text=a.text,
            sentiment=a.sentiment,
            engagement=a.engagement.total,
        )
        for a in ranked[:_TOP_STANCE]
    ]


def identify_consensus(agg: SentimentAggregate) -> ConsensusAnalysis:
    """Split posts into those agreeing with and those opposing the average."""
    avg = agg.average_sentiment
    consensus: list[PostAnalysis] = []
    contrarian: list[PostAnalysis] = []
    for analysis in agg.per_post_analysis:
        stance = classify_stance(analysis.sentiment, avg)
        if stance == "contrarian":
            contrarian.append(analysis)
        elif stance == "consensus":
            consensus.append(analysis)

    return ConsensusAnalysis(
        overall_bias=label_for(avg),
        average_sentiment=avg,
        consensus_count=len(consensus),
        contrarian_count=len(contrarian),
        top_consensus=_stance_quotes(consensus),
        top_contrarian=_stance_quotes(contrarian),
    )


def aggregate_trends(agg: SentimentAggregate) -> TrendReport:
    """Build the full trend report; an empty aggregate gives an empty report."""
    now = datetime.now(UTC)

    if agg.total_posts == 0:
        logger.warning(_NO_DATA_WARNING)
        return TrendReport(generated_at=now, warnings=[_NO_DATA_WARNING])

    report = TrendReport(
        generated_at=now,
        total_posts=agg.total_posts,
        overall_sentiment=OverallSentiment(
            score=agg.average_sentiment, label=agg.overall_label
        ),
        trending_narratives=build_trending_narratives(agg),
        token_trends=build_token_trends(agg),
        notable_posts=extract_notable_posts(agg),
        consensus_analysis=identify_consensus(agg),
        top_keywords=[
            KeywordCount(word=word, count=count)
            for word, count in list(agg.keyword_frequency.items())[:_TOP_KEYWORDS]
        ],
    )
    logger.info(
        "Trend report: %d narratives, %d tokens, %d notable posts",
        len(report.trending_narratives),
        len(report.token_trends),
        len(report.notable_posts),
    )
    return report
