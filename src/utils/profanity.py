"""
Blocked-word filter for user supplied names.

Every base word is expanded letter by letter into character classes that also accept common look-alikes
("a" also matches "4" and "@", "s" also matches "5" and "$", ...). All words are joined into one case-insensitive
pattern, compiled once at import and shared by every caller.
Matching is by substring, so a blocked word inside a longer word still counts.
"""

import re

BASE_WORDS: frozenset[str] = frozenset(
    {
        "anal", "arse", "ass", "bastard", "bawdy", "bitch", "blow", "bollock", "boner", "boob",
        "booty", "bugger", "bullshit", "butt", "cameltoe", "carpet", "chink", "choad", "clit", "cluster",
        "cock", "coon", "cooch", "cooter", "crap", "cum", "cunt", "damn", "degenerate", "dick",
        "dildo", "dipshit", "douche", "dyke", "fag", "fanny", "feltch", "fingerbang", "fist", "flamer",
        "freak", "fuck", "gangbang", "gay", "goatse", "goddamn", "gook", "grope", "handjob", "hardcore",
        "hoe", "homo", "honkey", "horny", "hump", "jack off", "jap", "jerk", "jigaboo", "jizz",
        "kike", "kkk", "kunt", "labia", "lesbo", "lezzie", "lust", "masturb", "milf", "minge",
        "molest", "motherfuck", "muff", "mung", "nazi", "negro", "nig", "nutsack", "orgasm", "paki",
        "panty", "pecker", "penis", "pervert", "phag", "piss", "poon", "porn", "prick", "pube",
        "puss", "queef", "queer", "quim", "rape", "raunch", "rectum", "retard", "rim", "sack",
        "sadist", "schlong", "scrote", "scum", "semen", "sex", "shag", "shit", "skank", "skeet",
        "slut", "smeg", "smut", "snatch", "spaz", "spic", "spooge", "suck", "suckmy", "swallow",
        "teabag", "testicle", "tit", "toke", "tosser", "turd", "twat", "vag", "vagina", "vibe",
        "vibrator", "vulva", "wank", "wetback", "whore", "womb", "wop", "xxx", "yaoi", "yiffy",
        "zoophile", "zoosex", "abuse", "addict", "anus", "bang", "beaver", "beefcurtain", "bimbo", "blowjob",
        "bodily", "boink", "bonk", "bootie", "brutal", "bukake", "bull", "camel", "cheeks", "climax",
        "cocky", "condom", "corrupt", "crotch", "crude", "cummer", "cunning", "curs", "cutter", "dammit",
        "deepthroat", "degrade", "deviant", "diaper", "dirtypillows", "dominatrix", "dragqueen", "ejacul", "enema", "erect",
        "escort", "excrement", "expose", "extort", "fetish", "filth", "flesh", "fondl", "fornic", "g-spot",
        "genital", "groin", "gypsy", "hardon", "hentai", "hooker", "horn", "hustler", "incest", "innuendo",
        "intercourse", "jiggle", "kama", "kinky", "kissing", "latex", "lecher", "lick", "lingerie", "loins",
        "lube", "lusty", "malestimulation", "manhood", "masochist", "meatstick", "menstru", "miniskirt", "missionary", "moan",
        "mooch", "moron", "nasty", "nipple", "nookie", "nudity", "obscene", "orifice", "orgy",
        "panties", "pantyhose", "peep", "penetrat", "phallus", "playboy", "pole", "prostitut",
        "pubic", "puke", "pummel", "raunchy", "rear", "rectal", "rubber", "scat", "seduce", "sensual",
        "sewage", "shame", "shlong", "shove", "shower", "shut", "silly", "slapper", "sleaze", "slink",
        "slope", "smack", "snort", "sodom", "softcore", "spank", "spasm", "spit", "splooge", "spreader",
        "squeeze", "stiff", "strip", "stroke", "stud", "submissive", "sultry", "swine", "syringe", "taint",
        "tease", "tempt", "thong", "tight", "titty", "topless", "tramp", "transvestite", "trollop", "tush",
        "twerk", "undress", "urinal", "urinate", "urinat", "vibrator", "virgin", "voyeur", "wank", "wax",
        "wedge", "wet", "whip", "whitetrash", "wild", "xrate", "yank", "yeast", "zipper", "zits",
        "abortion", "affair", "asphyx", "babes", "backdoor", "ballgag", "bareback", "bazoom", "bdsm",
        "beast", "beej", "biatch", "bind", "bisex", "blackface", "bod",
        "bondage", "bootlick", "bottom", "bra", "breast", "brothel", "bulge", "cage", "carne", "chain",
        "cheek", "clench", "cling", "clown", "cockpit", "come", "consent", "contracept", "cuddle",
        "cunniling", "defile", "desire", "devour", "dirty", "discharge", "dominate", "donkey", "drench", "drip",
        "cumshot", "creamp", "breed", "nut", "bust",
        "facial", "thrust", "stroke", "shaft",
        "spread", "bare", "load", "seed",
        "assplay", "analplay", "oral",
        "balls", "ballz", "ballsack",
        "girth", "head", "rimjob",
        "kink", "domme", "sub", "subby",
        "daddy", "master", "slave",
        "collar", "leash", "petplay",
        "humiliate", "discipline",
        "dtf", "hookup", "fwb",
        "quickie", "sugar",
        "cashapp", "venmo", "paypal",
        "rates", "services",
        "fgt", "tranny", "raghead",
        "whitepower", "heil",
        "hitler",
        "ejac",
    }
)

# Look-alike characters accepted for a letter, the letter itself included
SUBSTITUTIONS: dict[str, str] = {
    "a": "a4@",
    "b": "b8",
    "c": "c(",
    "e": "e3",
    "i": "i1!",
    "l": "l1|",
    "o": "o0",
    "s": "s5$",
    "t": "t7+",
    "g": "g9",
}


def pattern_for(word: str) -> str:
    """'ass' -> '[a4@][s5$][s5$]'"""
    return "".join(
        f"[{re.escape(SUBSTITUTIONS.get(char.lower(), char))}]" for char in word
    )


def _compile(words: frozenset[str]) -> re.Pattern[str]:
    # sorted for a reproducible pattern, sets have no stable order
    return re.compile("|".join(pattern_for(word) for word in sorted(words)), re.IGNORECASE)


BLOCKED_PATTERN: re.Pattern[str] = _compile(BASE_WORDS)


def contains_blocked_word(text: str) -> bool:
    return BLOCKED_PATTERN.search(text) is not None
