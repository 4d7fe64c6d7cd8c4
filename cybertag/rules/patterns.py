"""Regular-expression catalogue for the cyber heuristics.

Patterns are kept as source strings. Rules reference them by value and the
engine compiles them on first use, so a rule table can be inspected, diffed
or loaded from data without touching compiled objects.

Only part of the catalogue is referenced by the default rule table. The
remaining entries (release markers such as `BETA_OR_ALPHA` and
`SERVICE_PACK`, the Java product names, file, symbol and domain shapes)
have no rule using them yet; they are catalogue data for custom tables.
"""

# Version-ish fragments
VERSION_CHARS = r"[0-9x\.\-]"
BEFORE_OR_THROUGH = r"^(before|through) [0-9x\.\-]"
AND_EARLIER = r"[0-9x\.][0-9x\.\-]* and earlier$"
LIST_CONTINUATION = r"^([,]|and) (and )?[0-9]$"
CALL_PARENS = r"\(\)$"
VERSION_KEYWORD = r"^[vV]ersion[_\-a-zA-Z0-9]* [0-9]"
ALL_VERSIONS = r"^(all|every) (supported )?(versions?|releases?)$"
PRIOR_TO = r"^prior to$"
DIGITS = r"[0-9]+"
PRE_RELEASE = r"^pre[0-9a-zA-Z._-]* [0-9]"
RELEASE_OR_UPDATE = r"^(release|[uU]pdate)[_\-a-zA-Z0-9]* [0-9]"
BETA_OR_ALPHA = r"\b[bB]eta|[aA]lpha\b"
SERVICE_PACK = r"^service pack [0-9]$"
VERSION_ONLY = r"^[0-9\-._]+$"

# Java product names (match case-insensitively)
JAVA_RUNTIME_PRODUCT = r"^java ((runtime environment)|(web start)|(for business)|(system web (server)?)) [0-9.\-_]+$"
JAVA_ACCESS_MANAGER = r"^java system access manager [0-9.\-_]+$"
JAVA_EDITION = r"^java (plug-in|se|ee|me) [0-9.\-_]+$"
J2SE = r"^j2se[0-9]*$"
JAVA_VM = r"JavaVM"
JAVA_NAMED = r"^Java [A-Z]"

# Vulnerability identifiers
CVE_ID = r"CVE-[0-9]{4}-[0-9]{4}"
MS_BULLETIN = r"MS[0-9]{2}-[0-9]{3}"

# Symbols, files and products
_IDENT = r"(([a-zA-Z0-9\_\.]*[a-z0-9]+[A-Z]+)|([a-zA-Z0-9\_\.]*[A-Za-z0-9\.]+\_[a-zA-Z0-9\.]+))"
SYMBOL_PAIR = rf"^{_IDENT} (and|or) {_IDENT} (function|parameter|method)"
FUNCTION_IN_EXTENSION = r"^function in \.[a-zA-Z0-9]{1,4}$"
EXTENSION_FILES = r"^\.[a-zA-Z0-9]{1,4} (files?|scripts?)$"
FILE_NAME = r"^([a-zA-Z0-9.\-_/]+\.[a-zA-Z0-9]{1,4})$"
DOMAIN_SUFFIX = r"\.com|\.org|\.net|\.mobi$"
DOTTED_CAMEL = r"[a-z]\.[A-Z]"
CAPS_COMPONENT = r"^[A-Z]+ (component|plugin|plug-in)"
ORACLE_PRODUCT = r"^Oracle [A-Z]+"
WEBKIT = r"^WebKit$"
COMMA_AND = r"^, and$"

# Single-token version shapes: 1.2.3, 2.x, 1.0beta, 4.1_07, 3.0-rc1, SP1 ...
VERSION_SHAPES: tuple[str, ...] = (
    r"^[0-9]+(\.|x)+[0-9a-zA-Z\-\.]{1,}$",
    r"^[0-9.x]{2,}\.+-[0-9a-zA-Z.]+$",
    r"^[0-9\.x]+\.?[a-zA-Z.]+$",
    r"^[0-9\.x]+_[a-zA-Z0-9.]+$",
    r"^[0-9\.x]+\%[0-9a-zA-Z.]+$",
    r"^[0-9\.x]+-([0-9.]+[a-zA-Z0-9.\-_]*|[a-zA-Z0-9.\-_]*[0-9.]+)$",
    r"^[0-9a-z\-_.]*\%[0-9a-z\-_.]+",
    r"-[a-zA-Z0-9.]+$",
    r"^alpha[_0-9a-zA-Z.]*",
    r"^beta[_0-9a-zA-Z.]*",
    r"^[A-Z]{1,3}[0-9]$",
)
