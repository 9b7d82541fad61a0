"""Lexicon-based sentiment, token and narrative analysis for scraped posts.

Everything here is a pure function of its input; no LLM or network calls.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from ctscan.lexicon import (
    NARRATIVE_KEYWORDS,
    STOP_WORDS,
    TOKEN_RE,
    WEIGHTED_LEXICONS,
    WORD_RE,
)
from ctscan.models import (
    Engagement,
    Label,
    NarrativeStat,
    Post,
    PostAnalysis,
    Quote,
    SentimentAggregate,
    TokenStat,
)

logger = logging.getLogger(__name__)

LABEL_THRESHOLD = 0.1

_MAX_SAMPLES = 5
_QUOTE_CHARS = 200
_ANALYSIS_CHARS = 300
_TOP_KEYWORDS = 50


def label_for(score: float) -> Label:
    """Three-way label used at post, token, narrative and corpus level."""
    if score > LABEL_THRESHOLD:
        return "bullish"
    if score < -LABEL_THRESHOLD:
        return "bearish"
    return "neutral"


def score_sentiment(text: str) -> float:
    """Score *text* in [-1, 1]: mean contribution of every lexicon hit.

    Text with no lexicon hits scores exactly 0.
    """
    lower = text.lower()
    total = 0.0
    signals = 0
    for words, weight in WEIGHTED_LEXICONS:
        for word in words:
            if word in lower:
                total += weight
                signals += 1
    if signals == 0:
        return 0.0
    return max(-1.0, min(1.0, total / signals))


def extract_tokens(text: str) -> tuple[str, ...]:
    """Return unique upper-cased asset symbols in order of first mention."""
    tokens: dict[str, None] = {}
    for m in TOKEN_RE.finditer(text):
        token = (m.group(1) or m.group(2)).upper()
        tokens.setdefault(token, None)
    return tuple(tokens)


def identify_narratives(text: str) -> tuple[str, ...]:
    """Return every narrative with at least one keyword in *text*."""
    lower = text.lower()
    return tuple(
        name
        for name, keywords in NARRATIVE_KEYWORDS
        if any(kw in lower for kw in keywords)
    )


def _quote(post: Post, sentiment: float) -> Quote:
    return Quote(
        author=post.author,
        text=post.text[:_QUOTE_CHARS],
        sentiment=sentiment,
        engagement=post.likes + post.retweets,
    )


def analyze_post(post: Post) -> PostAnalysis:
    sentiment = score_sentiment(post.text)
    return PostAnalysis(
        post=post,
        text=post.text[:_ANALYSIS_CHARS],
        sentiment=sentiment,
        label=label_for(sentiment),
        tokens=extract_tokens(post.text),
        narratives=identify_narratives(post.text),
        engagement=Engagement(
            likes=post.likes,
            retweets=post.retweets,
            views=post.views,
            bookmarks=post.bookmarks,
        ),
    )


def analyze(posts: Sequence[Post]) -> SentimentAggregate:
    """Analyse a batch of posts and aggregate token/narrative/keyword stats.

    An empty batch yields a zero-valued aggregate with every field present.
    """
    if not posts:
        return SentimentAggregate()

    token_stats: dict[str, TokenStat] = {}
    narrative_stats: dict[str, NarrativeStat] = {}
    narrative_sums: dict[str, float] = {}
    keyword_freq: Counter[str] = Counter()
    analyses: list[PostAnalysis] = []
    total_sentiment = 0.0

    for post in posts:
        analysis = analyze_post(post)
        analyses.append(analysis)
        sentiment = analysis.sentiment
        total_sentiment += sentiment

        for token in analysis.tokens:
            stat = token_stats.setdefault(token, TokenStat(token=token))
            stat.mention_count += 1
            if analysis.label == "bullish":
                stat.bullish_count += 1
            elif analysis.label == "bearish":
                stat.bearish_count += 1
            else:
                stat.neutral_count += 1
            if len(stat.sample_quotes) < _MAX_SAMPLES:
                stat.sample_quotes.append(_quote(post, sentiment))

        for name in analysis.narratives:
            nar = narrative_stats.setdefault(name, NarrativeStat(name=name))
            nar.mention_count += 1
            narrative_sums[name] = narrative_sums.get(name, 0.0) + sentiment
            if len(nar.sample_quotes) < _MAX_SAMPLES:
                nar.sample_quotes.append(_quote(post, sentiment))

        keyword_freq.update(
            w for w in WORD_RE.findall(post.text.lower()) if w not in STOP_WORDS
        )

    for name, nar in narrative_stats.items():
        nar.average_sentiment = round(narrative_sums[name] / nar.mention_count, 3)

    avg = round(total_sentiment / len(posts), 3)
    logger.info(
        "Analysed %d posts: avg sentiment %.3f, %d tokens, %d narratives",
        len(posts),
        avg,
        len(token_stats),
        len(narrative_stats),
    )

    return SentimentAggregate(
        total_posts=len(posts),
        average_sentiment=avg,
        overall_label=label_for(avg),
        token_stats=token_stats,
        narrative_stats=narrative_stats,
        keyword_frequency=dict(keyword_freq.most_common(_TOP_KEYWORDS)),
        per_post_analysis=analyses,
    )
