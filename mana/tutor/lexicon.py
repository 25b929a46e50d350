"""Keyword lexicons — configuration data for every text heuristic.

One Lexicon per supported language. The Japanese lists are the canonical
data the character was designed with; the English lists are their working
counterparts. Treat everything here as data: the heuristics that consume it
live in tutor/heuristics.py, ai/reply_analysis.py, tutor/profile.py and
tutor/emotion.py.

Matching rules (see heuristics.contains_any): entries made only of Latin
letters, spaces and apostrophes match case-insensitively on word
boundaries; everything else (CJK, digits, bullets) matches as a substring.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Lexicon:
    """All keyword lists for one language."""

    language: str
    topic_keywords: dict[str, tuple[str, ...]]
    example_markers: tuple[str, ...]
    step_markers: tuple[str, ...]
    polite_markers: tuple[str, ...]
    clarity_markers: tuple[str, ...]
    # AI reply analysis
    reply_positive: tuple[str, ...] = ()
    reply_encouraging: tuple[str, ...] = ()
    reply_confused: tuple[str, ...] = ()
    mood_excited: tuple[str, ...] = ()
    mood_happy: tuple[str, ...] = ()
    mood_confused: tuple[str, ...] = ()
    # Learner profile analysis
    style_keywords: dict[str, tuple[str, ...]] = field(default_factory=dict)
    motivation_keywords: dict[str, tuple[str, ...]] = field(default_factory=dict)
    # Learner emotion analysis
    emotion_keywords: dict[str, tuple[str, ...]] = field(default_factory=dict)


JA = Lexicon(
    language="ja",
    topic_keywords={
        "algebra": ("方程式", "解", "変数", "文字", "係数", "項", "因数分解", "展開"),
        "geometry": ("図形", "面積", "角度", "直線", "円", "三角形", "四角形", "体積"),
        "functions": ("関数", "グラフ", "座標", "傾き", "切片", "変化", "比例", "反比例"),
        "probability": ("確率", "場合の数", "順列", "組合せ", "事象", "標本空間"),
    },
    example_markers=("例えば", "たとえば", "具体的に", "実際に", "つまり", "だから"),
    step_markers=("まず", "次に", "最後に", "①", "②", "③", "1.", "2.", "3.", "手順"),
    polite_markers=("です", "である", "ます", "だと思います", "と考えます"),
    clarity_markers=("つまり", "すなわち", "というのは", "ということは"),
    reply_positive=("すごい", "とても", "よく分かった", "詳しく", "ありがとう", "素晴らしい", "完璧"),
    reply_encouraging=("なるほど", "いいね", "もう少し", "続き", "もっと"),
    reply_confused=("分からない", "難しい", "混乱", "うーん", "ちょっと"),
    mood_excited=("すごい", "素晴らしい", "完璧", "わあ"),
    mood_happy=("ありがとう", "よく分かった", "なるほど"),
    mood_confused=("分からない", "難しい", "混乱", "うーん"),
    style_keywords={
        "visual": ("図", "表", "グラフ", "見る", "画像", "色"),
        "auditory": ("聞く", "説明", "話", "音"),
        "kinesthetic": ("やってみる", "実践", "手", "体験"),
        "reading": ("書く", "読む", "メモ", "文字"),
    },
    motivation_keywords={
        "fun_learning": ("楽しい", "面白い"),
        "achievement": ("目標", "できるように"),
        "recognition": ("褒め", "認め"),
    },
    emotion_keywords={
        "confused": ("わからない", "分からない", "理解できない", "意味不明", "よくわからない", "難しい", "???"),
        "frustrated": ("むずかしい", "できない", "だめ", "無理", "イライラ", "もういや", "諦め"),
        "confident": ("わかった", "分かった", "理解した", "簡単", "できた", "知ってる", "余裕"),
        "curious": ("なぜ", "どうして", "もっと", "興味深い", "面白い", "他には", "詳しく"),
        "excited": ("楽しい", "おもしろい", "面白い", "すごい", "やった", "嬉しい", "！！"),
    },
)

EN = Lexicon(
    language="en",
    topic_keywords={
        "algebra": (
            "equation", "solve", "solution", "variable", "coefficient",
            "term", "factor", "factoring", "expand",
        ),
        "geometry": (
            "shape", "area", "angle", "line", "circle", "triangle",
            "rectangle", "square", "volume",
        ),
        "functions": (
            "function", "graph", "coordinate", "slope", "intercept",
            "rate of change", "proportional", "inversely proportional",
        ),
        "probability": (
            "probability", "outcome", "outcomes", "permutation",
            "combination", "event", "sample space",
        ),
    },
    example_markers=(
        "for example", "for instance", "e.g.", "specifically",
        "in practice", "such as",
    ),
    step_markers=(
        "first", "firstly", "next", "then", "finally", "step",
        "1.", "2.", "3.", "①", "②", "③",
    ),
    polite_markers=("please", "i think", "i believe", "thank you"),
    clarity_markers=("in other words", "that is", "this means", "which means"),
    reply_positive=(
        "amazing", "very", "i understand", "in detail", "thank you",
        "wonderful", "perfect",
    ),
    reply_encouraging=("i see", "nice", "a little more", "go on", "more"),
    reply_confused=("don't understand", "difficult", "confused", "hmm", "a bit"),
    mood_excited=("amazing", "wonderful", "perfect", "wow"),
    mood_happy=("thank you", "i understand", "i see"),
    mood_confused=("don't understand", "difficult", "confused", "hmm"),
    style_keywords={
        "visual": ("diagram", "table", "graph", "see", "picture", "color"),
        "auditory": ("hear", "explain", "talk", "sound"),
        "kinesthetic": ("try it", "practice", "hands-on", "experience"),
        "reading": ("write", "read", "notes", "text"),
    },
    motivation_keywords={
        "fun_learning": ("fun", "interesting"),
        "achievement": ("goal", "be able to"),
        "recognition": ("praise", "recognized"),
    },
    emotion_keywords={
        "confused": (
            "don't understand", "don't get", "not sure", "confusing",
            "difficult", "no idea", "???",
        ),
        "frustrated": (
            "can't", "impossible", "give up", "annoying", "too hard",
            "hopeless", "hate this",
        ),
        "confident": (
            "got it", "i understand", "understood", "easy", "i did it",
            "i know", "no problem",
        ),
        "curious": (
            "why", "how come", "more", "interesting", "what else",
            "in detail", "tell me",
        ),
        "excited": ("fun", "awesome", "amazing", "yay", "happy", "love", "!!"),
    },
)

LEXICONS: dict[str, Lexicon] = {JA.language: JA, EN.language: EN}


def lexicons_for(language: str | None = None) -> tuple[Lexicon, ...]:
    """Returns the lexicons to consult.

    Args:
        language: A language code to restrict matching to, or None to
            consult every configured language.

    Raises:
        KeyError: If a specific language is requested but not configured.
    """
    if language is None:
        return tuple(LEXICONS.values())
    return (LEXICONS[language],)
