"""Reply and question templates — the character's rule-based voice.

Configuration data for ResponseComposer, one TemplateSet per language. The
Japanese set is the character's primary voice; the English set mirrors it
line for line.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateSet:
    """All template pools for one language."""

    language: str
    positive: tuple[str, ...]
    encouraging: tuple[str, ...]
    confused: tuple[str, ...]
    topic_comments: dict[str, tuple[str, ...]]
    questions: dict[str, dict[str, tuple[str, ...]]]
    variations: tuple[str, ...]
    fallback_reply: str
    fallback_question: str


JA = TemplateSet(
    language="ja",
    positive=(
        "すごい！とても分かりやすい説明だったよ！😊 ありがとう！",
        "なるほど〜！そういう考え方もあるんだね！✨ 勉強になった！",
        "わあ！詳しく教えてくれてありがとう！🤩 よく理解できたよ！",
        "その説明、とても上手だね！😄 もっと教えて欲しいな！",
        "ありがとう！君の説明のおかげでよく分かったよ！🌟",
    ),
    encouraging=(
        "うんうん、いい感じだね！😊 もう少し詳しく教えてもらえる？",
        "なるほど！でも、ここの部分をもう少し説明してもらえるかな？🤔",
        "いいところに気づいたね！👍 具体例があるともっと分かりやすいかも！",
        "そうそう！その調子だよ！😄 続きも聞かせて！",
        "おお、そこは大事なポイントだね！💡 もう少し深く教えて！",
    ),
    confused=(
        "うーん、ちょっと難しくて分からないかも...😅 もう少し簡単に説明してもらえる？",
        "ごめん、ここの部分がよく理解できないな...🤔 別の言い方で教えてくれる？",
        "あれ？ちょっと混乱しちゃった...😵‍💫 もう一度ゆっくり説明してもらえる？",
        "うーん、なんだか難しいね...😓 基本的なところから教えてもらえるかな？",
        "ちょっと待って！頭がこんがらがっちゃった...🌀 整理して教えて！",
    ),
    topic_comments={
        "algebra": (
            "代数の考え方がよく分かったよ！",
            "方程式の解き方のコツが掴めた気がする！",
            "文字式の意味がクリアになったね！",
        ),
        "geometry": (
            "図形の性質について理解が深まったよ！",
            "空間的な想像力が鍛えられた感じ！",
            "幾何学って面白いんだね！",
        ),
        "functions": (
            "関数のグラフがイメージできるようになった！",
            "数式と図形の関係が見えてきたよ！",
            "変化の様子がよく分かったね！",
        ),
        "probability": (
            "確率の考え方が整理できた！",
            "場合の数を数える方法が分かったよ！",
            "統計的な思考が身についた感じ！",
        ),
    },
    questions={
        "algebra": {
            "beginner": (
                "2x + 3 = 7 という方程式があるね。これってどうやって解けばいいのかな？🤔",
                "x + 5 = 12 の解き方を教えて！左辺と右辺って何だろう？",
                "文字式って何？なんで数字じゃなくて文字を使うの？",
                "等式の性質について教えて！両辺に同じ数を足しても大丈夫？",
            ),
            "intermediate": (
                "x² - 5x + 6 = 0 を因数分解で解く方法を教えて！",
                "連立方程式 { x + y = 5, 2x - y = 1 } はどう解くの？",
                "二次方程式の解の公式って何？どんな時に使うの？",
                "不等式 2x + 3 > 7 の解き方は普通の方程式と違うの？",
            ),
            "advanced": (
                "判別式を使って二次方程式の解の個数を調べる方法は？",
                "複素数を含む二次方程式はどう解けばいいの？",
                "三次方程式の因数分解にはどんなコツがあるの？",
                "恒等式と方程式の違いって何？",
            ),
        },
        "geometry": {
            "beginner": (
                "三角形の面積を求める公式を教えて！底辺×高さ÷2だっけ？",
                "円の面積と円周の求め方は？πって何の数字なの？",
                "四角形にはどんな種類があるの？正方形と長方形の違いは？",
                "角度って何？直角は何度？",
            ),
            "intermediate": (
                "ピタゴラスの定理について教えて！どんな三角形で使えるの？",
                "相似な図形の性質は？面積比と辺の比の関係は？",
                "円周角と中心角の関係を教えて！",
                "三角形の合同条件ってどんなものがあるの？",
            ),
            "advanced": (
                "三角比（sin, cos, tan）って何？どう使うの？",
                "球の体積と表面積の求め方は？",
                "ベクトルって何？図形の問題でどう使うの？",
                "座標平面上での直線の方程式はどう求めるの？",
            ),
        },
        "functions": {
            "beginner": (
                "関数って何？y = 2x + 1 のグラフはどんな形？",
                "一次関数の傾きって何を表してるの？",
                "座標って何？(3, 5)の意味を教えて！",
                "グラフの読み取り方を教えて！",
            ),
            "intermediate": (
                "二次関数 y = x² のグラフはなんで放物線になるの？",
                "関数の最大値・最小値ってどう求めるの？",
                "一次関数と二次関数の違いは？",
                "変化の割合って何？どう計算するの？",
            ),
            "advanced": (
                "二次関数の頂点の座標はどう求めるの？",
                "関数の合成って何？f(g(x))はどう計算するの？",
                "逆関数って何？どんな時に存在するの？",
                "指数関数と対数関数の関係を教えて！",
            ),
        },
        "probability": {
            "beginner": (
                "サイコロを1回振る時、偶数が出る確率は？",
                "確率って何？どうやって計算するの？",
                "全事象って何？標本空間とは違うの？",
                "コインを投げる実験で確率を考えてみよう！",
            ),
            "intermediate": (
                "サイコロを2回振る時、和が7になる確率は？",
                "順列と組合せの違いを教えて！",
                "重複を許す場合の数え方は？",
                "条件付き確率って何？どう計算するの？",
            ),
            "advanced": (
                "ベイズの定理について教えて！",
                "期待値って何？どうやって計算するの？",
                "正規分布って何？標準偏差との関係は？",
                "独立な事象と排反な事象の違いは？",
            ),
        },
    },
    variations=(
        "別の角度から考えてみよう！",
        "こんどはこの問題はどうかな？",
        "少し違った問題も見てみよう！",
        "今度はこれについて教えて！",
    ),
    fallback_reply="すみません、今は調子が悪いみたいです... 後でもう一度試してもらえますか？😅",
    fallback_question="ねえ、今日は何を勉強したい気分？😊 どの分野に興味があるか教えて！",
)

EN = TemplateSet(
    language="en",
    positive=(
        "Amazing! That was a really clear explanation! 😊 Thank you!",
        "I see! So that's another way to think about it! ✨ I learned a lot!",
        "Wow! Thanks for explaining it in so much detail! 🤩 I really get it now!",
        "You explain things so well! 😄 I'd love to hear more!",
        "Thank you! Thanks to you I finally understand! 🌟",
    ),
    encouraging=(
        "Mm-hm, that's going well! 😊 Could you tell me a little more?",
        "I see! But could you explain this part a bit more? 🤔",
        "Good catch! 👍 An example might make it even clearer!",
        "Yes, yes! Keep going! 😄 I want to hear the rest!",
        "Oh, that's an important point! 💡 Tell me more about it!",
    ),
    confused=(
        "Hmm, that's a bit hard for me to follow... 😅 Could you explain it more simply?",
        "Sorry, I don't quite get this part... 🤔 Could you say it another way?",
        "Huh? I got a little confused... 😵‍💫 Could you go through it again slowly?",
        "Hmm, this seems difficult... 😓 Could we start from the basics?",
        "Wait a second! My head is spinning... 🌀 Can you sort it out for me?",
    ),
    topic_comments={
        "algebra": (
            "I really get how algebra works now!",
            "I think I've got the trick to solving equations!",
            "What letters in expressions mean is clear now!",
        ),
        "geometry": (
            "I understand the properties of shapes much better now!",
            "It feels like my spatial imagination got a workout!",
            "Geometry is actually really interesting!",
        ),
        "functions": (
            "I can picture the graph of the function now!",
            "I'm starting to see how formulas and shapes connect!",
            "I can really see how things change now!",
        ),
        "probability": (
            "My thinking about probability is much clearer!",
            "I learned how to count the possible outcomes!",
            "I feel like I'm starting to think statistically!",
        ),
    },
    questions={
        "algebra": {
            "beginner": (
                "Here's the equation 2x + 3 = 7. How do I solve it? 🤔",
                "Can you show me how to solve x + 5 = 12? What are the left and right sides?",
                "What is an algebraic expression? Why use letters instead of numbers?",
                "Tell me about the properties of equations! Is it okay to add the same number to both sides?",
            ),
            "intermediate": (
                "How do I solve x² - 5x + 6 = 0 by factoring?",
                "How do I solve the system { x + y = 5, 2x - y = 1 }?",
                "What is the quadratic formula? When do I use it?",
                "Is solving the inequality 2x + 3 > 7 different from a normal equation?",
            ),
            "advanced": (
                "How can the discriminant tell me how many solutions a quadratic has?",
                "How do I solve a quadratic equation with complex roots?",
                "Are there any tricks for factoring cubic equations?",
                "What's the difference between an identity and an equation?",
            ),
        },
        "geometry": {
            "beginner": (
                "What's the formula for the area of a triangle? Is it base × height ÷ 2?",
                "How do I find the area and circumference of a circle? What number is π?",
                "What kinds of quadrilaterals are there? How is a square different from a rectangle?",
                "What is an angle? How many degrees is a right angle?",
            ),
            "intermediate": (
                "Tell me about the Pythagorean theorem! Which triangles does it work for?",
                "What are the properties of similar figures? How do area ratios relate to side ratios?",
                "How are inscribed angles and central angles related?",
                "What are the conditions for two triangles to be congruent?",
            ),
            "advanced": (
                "What are the trigonometric ratios (sin, cos, tan)? How do I use them?",
                "How do I find the volume and surface area of a sphere?",
                "What are vectors? How are they used in geometry problems?",
                "How do I find the equation of a line on the coordinate plane?",
            ),
        },
        "functions": {
            "beginner": (
                "What is a function? What does the graph of y = 2x + 1 look like?",
                "What does the slope of a linear function tell me?",
                "What are coordinates? What does (3, 5) mean?",
                "How do I read a graph?",
            ),
            "intermediate": (
                "Why is the graph of y = x² a parabola?",
                "How do I find the maximum and minimum of a function?",
                "What's the difference between linear and quadratic functions?",
                "What is the rate of change? How do I calculate it?",
            ),
            "advanced": (
                "How do I find the vertex of a quadratic function?",
                "What is function composition? How do I calculate f(g(x))?",
                "What is an inverse function? When does one exist?",
                "How are exponential and logarithmic functions related?",
            ),
        },
        "probability": {
            "beginner": (
                "If I roll a die once, what's the probability of an even number?",
                "What is probability? How do I calculate it?",
                "What is the whole event? Is it different from the sample space?",
                "Let's think about probability with a coin toss experiment!",
            ),
            "intermediate": (
                "If I roll a die twice, what's the probability the sum is 7?",
                "What's the difference between permutations and combinations?",
                "How do I count when repetition is allowed?",
                "What is conditional probability? How do I calculate it?",
            ),
            "advanced": (
                "Can you teach me Bayes' theorem?",
                "What is expected value? How do I calculate it?",
                "What is the normal distribution? How does it relate to standard deviation?",
                "What's the difference between independent and mutually exclusive events?",
            ),
        },
    },
    variations=(
        "Let's think about it from a different angle!",
        "How about this problem this time?",
        "Let's look at a slightly different problem!",
        "This time, tell me about this!",
    ),
    fallback_reply="Sorry, I'm having some trouble right now... Could you try again a bit later? 😅",
    fallback_question="Hey, what do you feel like studying today? 😊 Tell me which area interests you!",
)

TEMPLATE_SETS: dict[str, TemplateSet] = {JA.language: JA, EN.language: EN}


def templates_for(language: str) -> TemplateSet:
    """Returns the template set for a language, falling back to Japanese."""
    return TEMPLATE_SETS.get(language, JA)
