"""Read-only keyword tables for sentiment, tokens, narratives and KOLs."""

from __future__ import annotations

import re

# ── Sentiment lexicons (substring matches on lower-cased text) ────────────
BULLISH_WORDS: tuple[str, ...] = (
    "bullish", "moon", "mooning", "pump", "pumping", "breakout", "ath",
    "all-time high", "buy", "buying", "long", "longing", "accumulate",
    "accumulating", "undervalued", "gem", "alpha", "send it", "sending", "rip",
    "ripping", "green", "recovery", "reversal", "bottom", "bottomed", "support",
    "bounce", "bouncing", "uptrend", "parabolic", "explosive", "massive",
    "insane", "huge", "flywheel", "supercycle", "adoption", "institutional",
    "inflows", "etf", "approval", "partnership", "launch", "mainnet", "upgrade",
    "catalyst", "outperform", "rally", "rallying", "strong", "strength",
    "conviction", "dip", "buy the dip", "btd", "wagmi", "generational",
    "opportunity", "rotation", "bid", "bidding",
)

BEARISH_WORDS: tuple[str, ...] = (
    "bearish", "dump", "dumping", "crash", "crashing", "sell", "selling",
    "short", "shorting", "overvalued", "bubble", "rug", "rugged", "scam",
    "ponzi", "fraud", "red", "bleeding", "capitulation", "liquidation",
    "liquidated", "rekt", "resistance", "rejection", "breakdown", "downtrend",
    "death cross", "bear market", "outflows", "decline", "declining", "weak",
    "weakness", "fear", "panic", "contagion", "insolvency", "bankrupt",
    "collapse", "hack", "hacked", "exploit", "vulnerability", "ngmi", "bag",
    "bagholder", "top signal", "euphoria", "overleveraged", "derisking",
    "de-risk", "caution", "warning",
)

FUD_INDICATORS: tuple[str, ...] = (
    "fud", "regulation", "ban", "sec", "lawsuit", "investigation", "subpoena",
    "enforcement", "crackdown", "shutdown", "delisting", "sanctions", "tether",
    "unbacked", "insolvent", "withdrawal halt", "frozen", "freeze",
)

HYPE_INDICATORS: tuple[str, ...] = (
    "airdrop", "100x", "1000x", "guaranteed", "free money", "cant lose",
    "can't lose", "easy money", "no brainer", "lfg", "lets go", "let's go",
    "gm", "ser", "narrative", "meta", "rotation", "szn", "season",
)

# (lexicon, weight per hit)
WEIGHTED_LEXICONS: tuple[tuple[tuple[str, ...], float], ...] = (
    (BULLISH_WORDS, 1.0),
    (BEARISH_WORDS, -1.0),
    (FUD_INDICATORS, -0.5),
    (HYPE_INDICATORS, 0.3),
)

# ── Tokens ─────────────────────────────────────────────────────────────────
KNOWN_TOKENS: tuple[str, ...] = (
    "BTC", "ETH", "SOL", "AVAX", "ARB", "OP", "SUI", "APT", "MATIC", "LINK",
    "DOT", "ADA", "XRP", "DOGE", "SHIB", "PEPE", "WIF", "JUP", "JTO", "TIA",
    "PYTH", "SEI", "INJ", "FET", "RNDR", "TAO", "NEAR", "ATOM", "FTM", "AAVE",
    "UNI", "MKR", "LDO", "RPL", "SSV", "EIGEN", "ETHFI", "PENDLE", "GMX",
    "DYDX", "SNX", "CRV", "BAL", "COMP", "SUSHI", "CAKE", "RAY", "ORCA",
    "MEME", "BONK", "FLOKI", "RENDER", "GRT", "FIL", "AR", "STRK", "ZKSYNC",
    "BASE", "BLAST", "MODE", "SCROLL", "LINEA", "MANTA", "BERACHAIN", "MONAD",
    "MOVEMENT", "HYPE",
)

# $cashtag (2-10 letters) or a whitelisted symbol as a whole word
TOKEN_RE = re.compile(
    r"\$([A-Z]{2,10})\b|\b(" + "|".join(KNOWN_TOKENS) + r")\b",
    re.IGNORECASE,
)

# ── Narratives (multi-label; table order is report order for ties) ────────
NARRATIVE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("AI/ML", ("ai", "artificial intelligence", "machine learning", "gpt", "llm",
               "agent", "agents", "ai agent", "depin ai")),
    ("DePIN", ("depin", "decentralized physical", "iot", "wireless", "helium",
               "hivemapper")),
    ("RWA", ("rwa", "real world asset", "tokenized", "tokenization", "treasury",
             "treasuries", "blackrock")),
    ("L2/Scaling", ("l2", "layer 2", "rollup", "zk", "zkevm", "optimistic", "base",
                    "arbitrum", "blast", "scroll", "linea")),
    ("DeFi", ("defi", "dex", "amm", "lending", "borrowing", "yield", "tvl",
              "liquidity", "farming", "staking", "restaking")),
    ("Memecoins", ("memecoin", "meme coin", "degen", "pump.fun", "bonk", "pepe",
                   "wif", "floki", "shib", "doge")),
    ("NFT/Gaming", ("nft", "nfts", "gaming", "gamefi", "metaverse", "ordinals",
                    "inscriptions", "brc-20")),
    ("Bitcoin", ("bitcoin", "btc", "halving", "mining", "ordinals", "brc20",
                 "runes", "lightning")),
    ("Ethereum", ("ethereum", "eth", "eip", "blob", "dencun", "pectra", "staking",
                  "restaking", "eigenlayer")),
    ("Solana", ("solana", "sol", "jupiter", "jup", "raydium", "marinade",
                "firedancer")),
    ("Regulation", ("regulation", "sec", "cftc", "congress", "bill", "stablecoin",
                    "compliance", "etf")),
    ("Macro", ("macro", "fed", "fomc", "rate cut", "rate hike", "cpi", "inflation",
               "recession", "treasury", "dxy", "dollar")),
    ("Airdrop", ("airdrop", "claim", "eligibility", "snapshot", "points", "season",
                 "farming points")),
)

# ── Keyword frequency ──────────────────────────────────────────────────────
WORD_RE = re.compile(r"\b[a-z]{4,}\b")

STOP_WORDS: frozenset[str] = frozenset({
    "this", "that", "with", "from", "have", "will", "been", "were", "they",
    "their", "what", "when", "which", "there", "about", "would", "could",
    "should", "just", "like", "more", "some", "than", "them", "then", "these",
    "into", "also", "very", "much", "most", "only", "over", "such", "here",
    "after", "before", "being", "does", "doing", "done", "each", "even",
    "every", "going", "good", "great", "know", "make", "many", "need",
    "next", "people", "really", "right", "same", "still", "take", "think",
    "time", "want", "well", "work", "your", "https", "http", "tweet",
})

# ── Key opinion leaders ────────────────────────────────────────────────────
# Roster kept as recorded. The *aboramsey handles look like data-entry slips
# (and raaboramsey is listed twice); re-audit before relying on them.
_KOL_ROSTER: tuple[str, ...] = (
    "milesdeutscher", "raaboramsey", "cryptobanter", "altcoindaily",
    "coinbureau", "benjamincowen", "raaboramsey", "datadash",
    "cburniske", "rleshner", "haaboramsey", "inversebrah",
    "blknoiz06", "hsaka", "gameaboramsey", "dlowobtc",
    "cryptohayes", "zaboramsey", "deaboramsey", "galaboramsey",
    "cobie", "ansem", "rewkang", "laurashin", "taboramsey",
    "pentosh1", "cryptokaleo", "crypto_birb", "cred_TA",
    "smartcontracter", "trader1sz", "credmark", "raboramsey",
    "onchainwizard", "route2fi", "thedefiedge", "defiignas",
    "shaboramsey", "lookonchain", "whale_alert", "arkaboramsey",
)

KNOWN_KOLS: frozenset[str] = frozenset(handle.lower() for handle in _KOL_ROSTER)
