"""Public suffix lookups over a built-in set of common rules."""

from __future__ import annotations

_RULES_TEXT = """
com net org edu gov mil int info biz name pro mobi aero coop museum
io co dev app ai xyz tv me ly gg cc eu us ca de fr it es nl ch se no dk fi
ie pt gr cz hu ro pl be at il ua ir id vn th my ph pk ru cn jp in au br nz
za mx kr tw hk sg ar tr uk
co.uk org.uk ac.uk gov.uk me.uk ltd.uk plc.uk net.uk sch.uk nhs.uk
co.jp ne.jp or.jp ac.jp go.jp ad.jp ed.jp gr.jp lg.jp
com.au net.au org.au edu.au gov.au asn.au id.au
co.in net.in org.in firm.in gen.in ind.in ac.in edu.in res.in gov.in
com.cn net.cn org.cn gov.cn edu.cn ac.cn
com.br net.br org.br gov.br edu.br
co.nz net.nz org.nz govt.nz ac.nz school.nz
co.za org.za net.za gov.za ac.za
com.mx org.mx gob.mx edu.mx net.mx
co.kr or.kr ne.kr go.kr ac.kr
com.tw org.tw net.tw gov.tw edu.tw idv.tw
com.hk org.hk net.hk gov.hk edu.hk idv.hk
com.sg org.sg net.sg gov.sg edu.sg per.sg
com.ar org.ar net.ar gob.ar edu.ar
com.tr org.tr net.tr gov.tr edu.tr
co.il org.il net.il ac.il gov.il
com.ua org.ua net.ua gov.ua edu.ua
co.id or.id ac.id go.id web.id
com.vn net.vn org.vn gov.vn edu.vn
co.th in.th ac.th go.th or.th
com.my net.my org.my gov.my edu.my
com.ph net.ph org.ph gov.ph edu.ph
com.pk net.pk org.pk gov.pk edu.pk
com.ru net.ru org.ru
github.io gitlab.io herokuapp.com appspot.com blogspot.com cloudfront.net
s3.amazonaws.com azurewebsites.net netlify.app vercel.app pages.dev
*.ck !www.ck *.bd *.er *.fk *.jm *.kh *.mm *.np *.pg
"""


def _load_rules() -> tuple[frozenset[str], frozenset[str], frozenset[str]]:
    plain, wildcard, exception = set(), set(), set()
    for rule in _RULES_TEXT.split():
        if rule.startswith("!"):
            exception.add(rule[1:])
        elif rule.startswith("*."):
            wildcard.add(rule[2:])
        else:
            plain.add(rule)
    return frozenset(plain), frozenset(wildcard), frozenset(exception)


_PLAIN, _WILDCARD, _EXCEPTION = _load_rules()


def public_suffix(domain: str) -> str:
    """Return the public suffix of ``domain``; unknown TLDs count as suffixes."""
    labels = domain.split(".")
    lowered = [label.lower() for label in labels]
    suffix_labels = 1
    exception_labels = None
    for count in range(1, len(lowered) + 1):
        candidate = ".".join(lowered[-count:])
        if candidate in _EXCEPTION:
            exception_labels = count - 1
        if candidate in _PLAIN:
            suffix_labels = max(suffix_labels, count)
        if count >= 2 and ".".join(lowered[-(count - 1):]) in _WILDCARD:
            suffix_labels = max(suffix_labels, count)
    if exception_labels is not None:
        suffix_labels = exception_labels
    return ".".join(labels[-suffix_labels:]) if suffix_labels else ""


def effective_tld_plus_one(domain: str) -> str:
    """Return the registrable domain: the public suffix plus one label."""
    if domain.startswith(".") or domain.endswith(".") or ".." in domain:
        raise ValueError(f"publicsuffix: empty label in domain {domain!r}")
    suffix = public_suffix(domain)
    if len(domain) <= len(suffix):
        raise ValueError(f"publicsuffix: cannot derive eTLD+1 for domain {domain!r}")
    i = len(domain) - len(suffix) - 1
    if domain[i] != ".":
        raise ValueError(f"publicsuffix: invalid public suffix {suffix!r} for domain {domain!r}")
    return domain[1 + domain.rfind(".", 0, i):]