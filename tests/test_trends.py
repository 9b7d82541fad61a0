"""Unit tests for trend aggregation, notable posts and consensus split."""

from ctscan.models import (
    Engagement,
    NarrativeStat,
    Post,
    PostAnalysis,
    Quote,
    SentimentAggregate,
    TokenStat,
)
from ctscan.sentiment import analyze, label_for
from ctscan.trends import (
    aggregate_trends,
    build_token_trends,
    build_trending_narratives,
    classify_stance,
    extract_notable_posts,
    identify_consensus,
    is_kol,
)


def _analysis(
    author: str = "anon",
    sentiment: float = 0.0,
    likes: int = 0,
    rts: int = 0,
    views: int = 0,
) -> PostAnalysis:
    post = Post(
        author=author,
        text=f"post by {author}",
        likes=likes,
        retweets=rts,
        views=views,
        origin="mirror",
    )
    return PostAnalysis(
        post=post,
        text=post.text,
        sentiment=sentiment,
        label=label_for(sentiment),
        engagement=Engagement(likes=likes, retweets=rts, views=views),
    )


def _agg(analyses: list[PostAnalysis], avg: float = 0.0) -> SentimentAggregate:
    return SentimentAggregate(
        total_posts=len(analyses),
        average_sentiment=avg,
        overall_label=label_for(avg),
        per_post_analysis=analyses,
    )


class TestEmptyReport:
    def test_zero_posts(self) -> None:
        report = aggregate_trends(SentimentAggregate())
        assert report.total_posts == 0
        assert report.trending_narratives == []
        assert report.token_trends == []
        assert report.notable_posts == []
        assert report.top_keywords == []
        assert report.consensus_analysis.overall_bias == "neutral"
        assert report.warnings


class TestClassifyStance:
    def test_contrarian_against_bullish_corpus(self) -> None:
        assert classify_stance(-0.4, 0.5) == "contrarian"

    def test_consensus_with_bullish_corpus(self) -> None:
        assert classify_stance(0.45, 0.5) == "consensus"

    def test_contrarian_against_bearish_corpus(self) -> None:
        assert classify_stance(0.4, -0.5) == "contrarian"

    def test_near_zero_is_neither(self) -> None:
        assert classify_stance(0.05, 0.0) is None
        assert classify_stance(0.0, 0.5) is None


class TestConsensus:
    def test_split_and_ranking(self) -> None:
        analyses = [
            _analysis("a", 0.5, likes=1),
            _analysis("b", 0.5, likes=30),
            _analysis("c", -1.0, likes=5),
            _analysis("d", 0.0),
        ]
        result = identify_consensus(_agg(analyses, avg=0.5))
        assert result.overall_bias == "bullish"
        assert result.consensus_count == 2
        assert result.contrarian_count == 1
        assert [q.author for q in result.top_consensus] == ["b", "a"]
        assert [q.author for q in result.top_contrarian] == ["c"]

    def test_capped_at_five(self) -> None:
        analyses = [_analysis(f"u{i}", 0.5, likes=i) for i in range(8)]
        result = identify_consensus(_agg(analyses, avg=0.5))
        assert result.consensus_count == 8
        assert len(result.top_consensus) == 5
        assert result.top_consensus[0].author == "u7"


class TestNotablePosts:
    def test_kol_included_regardless_of_engagement(self) -> None:
        notable = extract_notable_posts(_agg([_analysis("Cobie"), _analysis("nobody")]))
        assert [n.author for n in notable] == ["Cobie"]
        assert notable[0].is_kol is True

    def test_kol_match_case_insensitive(self) -> None:
        assert is_kol("COBIE")
        assert is_kol("cred_ta")
        assert not is_kol("someone_else")

    def test_engagement_floor(self) -> None:
        analyses = [
            _analysis("likes", likes=50),
            _analysis("rts", rts=20),
            _analysis("views", views=10_000),
            _analysis("low", likes=49, rts=19, views=9_999),
        ]
        authors = {n.author for n in extract_notable_posts(_agg(analyses))}
        assert authors == {"likes", "rts", "views"}

    def test_ranked_by_weighted_engagement(self) -> None:
        analyses = [_analysis("x", likes=100), _analysis("y", likes=10, rts=40)]
        notable = extract_notable_posts(_agg(analyses))
        assert [n.author for n in notable] == ["y", "x"]
        assert notable[0].is_kol is False

    def test_capped_at_twenty(self) -> None:
        analyses = [_analysis(f"u{i}", likes=100 + i) for i in range(25)]
        assert len(extract_notable_posts(_agg(analyses))) == 20


class TestTokenTrends:
    def test_split_rounding_and_label(self) -> None:
        stat = TokenStat(
            token="SOL",
            mention_count=3,
            bullish_count=1,
            bearish_count=0,
            neutral_count=2,
            sample_quotes=[
                Quote(author="a", text="t", sentiment=0.0, engagement=1),
                Quote(author="b", text="t", sentiment=0.0, engagement=9),
                Quote(author="c", text="t", sentiment=0.0, engagement=5),
                Quote(author="d", text="t", sentiment=0.0, engagement=7),
            ],
        )
        agg = SentimentAggregate(total_posts=3, token_stats={"SOL": stat})
        (trend,) = build_token_trends(agg)
        assert trend.sentiment == 0.333
        assert trend.label == "bullish"
        assert [q.author for q in trend.top_quotes] == ["b", "d", "c"]

    def test_tie_is_neutral(self) -> None:
        stat = TokenStat(token="BTC", mention_count=2, bullish_count=1, bearish_count=1)
        (trend,) = build_token_trends(SentimentAggregate(token_stats={"BTC": stat}))
        assert trend.label == "neutral"
        assert trend.sentiment == 0.0

    def test_ranked_and_capped(self) -> None:
        stats = {
            f"T{i:02d}": TokenStat(token=f"T{i:02d}", mention_count=i, neutral_count=i)
            for i in range(1, 31)
        }
        trends = build_token_trends(SentimentAggregate(token_stats=stats))
        assert len(trends) == 25
        assert trends[0].token == "T30"


class TestTrendingNarratives:
    def test_ranked_capped_with_three_samples(self) -> None:
        quotes = [Quote(author=f"q{i}", text="t", sentiment=0.5) for i in range(5)]
        stats = {
            f"N{i:02d}": NarrativeStat(
                name=f"N{i:02d}",
                mention_count=i,
                average_sentiment=-0.5,
                sample_quotes=quotes,
            )
            for i in range(1, 14)
        }
        trends = build_trending_narratives(SentimentAggregate(narrative_stats=stats))
        assert len(trends) == 10
        assert trends[0].narrative == "N13"
        assert trends[0].label == "bearish"
        assert [q.author for q in trends[0].sample_quotes] == ["q0", "q1", "q2"]


class TestAggregateTrends:
    def test_three_post_scenario(self) -> None:
        posts = [
            Post(author="a", text="bullish BTC: breakout incoming", origin="mirror"),
            Post(author="b", text="bearish BTC: dump warning", origin="mirror"),
            Post(author="c", text="neutral ETH chart update", origin="mirror"),
        ]
        report = aggregate_trends(analyze(posts))

        btc = next(t for t in report.token_trends if t.token == "BTC")
        assert btc.bullish_count == 1
        assert btc.bearish_count == 1
        assert btc.sentiment == 0.0

        bitcoin = next(n for n in report.trending_narratives if n.narrative == "Bitcoin")
        assert bitcoin.mention_count >= 2

        assert report.total_posts == 3
        assert report.overall_sentiment.label == "neutral"
        assert report.warnings == []

    def test_top_keywords_capped(self) -> None:
        freq = {f"word{chr(97 + i % 26)}{i}": 30 - i for i in range(30)}
        agg = SentimentAggregate(
            total_posts=1, keyword_frequency=freq, per_post_analysis=[_analysis()]
        )
        report = aggregate_trends(agg)
        assert len(report.top_keywords) == 20
        assert report.top_keywords[0].count == 30
