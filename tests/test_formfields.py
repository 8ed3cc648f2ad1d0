from katana.utils.formfields import DEFAULT_FORM_ENCTYPE, parse_form_fields

HTML_FORM_EXAMPLE = r"""<html>
<head>
	<title>HTML Form Test</title>
</head>
<body>
	<form method="POST" action="/test">
		<input type="text" name="firstname"><br>
		<textarea name=textarea1></textarea>
		<select name=select1></select>
		<input type=text />
	</form>
	<form method=post action=https://abs.example.com></form>
	<form action=//prel.example.com></form>
	<form action=\\unc.example.com></form>
	<form action=/root_rel></form>
	<form action=rel_path></form>
	<form></form>
</body>
</html>"""


def _forms():
    return parse_form_fields(HTML_FORM_EXAMPLE, "https://example.com/path")


def test_parse_form_fields_actions_and_methods():
    forms = _forms()
    assert len(forms) == 7
    assert forms[0].action == "https://example.com/test"
    assert forms[0].method == "POST"
    assert forms[1].method == "POST"
    assert forms[1].action == "https://abs.example.com"
    assert forms[2].method == "GET"
    assert forms[2].action == "//prel.example.com"
    assert forms[3].method == "GET"
    assert forms[3].action == "\\\\unc.example.com"
    assert forms[4].method == "GET"
    assert forms[4].action == "https://example.com/root_rel"
    assert forms[5].method == "GET"
    assert forms[5].action == "https://example.com/path/rel_path"
    assert forms[6].method == "GET"
    assert forms[6].action == "https://example.com/path"


def test_parse_form_fields_parameters():
    forms = _forms()
    assert "firstname" in forms[0].parameters
    assert "textarea1" in forms[0].parameters
    assert "select1" in forms[0].parameters
    assert len(forms[0].parameters) == 3


def test_enctype_defaults_only_for_non_get():
    forms = _forms()
    assert forms[0].enctype == DEFAULT_FORM_ENCTYPE
    assert forms[1].enctype == DEFAULT_FORM_ENCTYPE
    assert forms[2].enctype == ""


def test_relative_action_kept_without_base():
    forms = parse_form_fields('<form action="rel_path"></form>')
    assert [f.action for f in forms] == ["rel_path"]