# katana

Building blocks for a web crawler. The package decides which URLs to follow,
in what order to visit them, and how to report what was found.

## Installation

```
pip install .
```

Install with the test extra to run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

### Deciding what to crawl

- `katana.utils.scope.ScopeManager(in_scope, out_of_scope, field_scope, no_scope)`
  checks whether a URL is in scope with `validate(url, root_hostname)`. The
  hostname rule is `dn`, `rdn`, `fqdn`, or any other string, which is taken
  as a regular expression matched against the hostname. In-scope and
  out-of-scope URL patterns are optional. Invalid patterns raise `ScopeError`.
  `get_domain_rdn_and_dn(domain)` returns the registrable domain and its name
  without the public suffix.
- `katana.utils.publicsuffix` provides `public_suffix(domain)` and
  `effective_tld_plus_one(domain)`. They use a built-in set of common rules
  (generic and country TLDs, common second-level suffixes such as `co.uk`, and
  some hosting suffixes). It is not the full public suffix list. An unknown
  TLD counts as a suffix.
- `katana.utils.extensions.Validator(extensions_match, extensions_filter)`
  accepts or rejects paths by file extension with `validate_path(item)`. A
  built-in list of binary and media extensions is rejected by default. A match
  list replaces that list.
- `katana.utils.filters.SimpleFilter` is an in-memory, thread-safe filter.
  `unique_url` and `unique_content` (MD5 of the content) return True the first
  time they see a value. `is_cycle` flags very long URLs and URLs in which a
  long substring repeats many times. `Filter` is the abstract interface.

### Ordering work

- `katana.utils.crawlqueue.CrawlQueue(strategy_name, timeout)` holds pending
  items in `"breadth-first"` order (lowest priority first) or `"depth-first"`
  order (last in, first out). `pop()` is a generator. It yields items as they
  arrive and ends once the queue has stayed empty for longer than `timeout`
  seconds. `PriorityQueue`, `Stack` and `Strategy` are available on their own.

### Extracting from pages

- `katana.utils.regex.extract_body_endpoints` and `extract_relative_endpoints`
  find distinct endpoints in HTML bodies and in JavaScript.
- `katana.utils.helpers` covers the following:
  - `parse_link_tag`, `parse_refresh_tag` and `parse_srcset_tag` read the values of `Link`, `Refresh` and `srcset`.
  - `is_url` checks that a string parses as a URL with a hostname.
  - `flatten_headers` joins multi-valued headers with `;`.
  - `replace_all_query_param` blanks every query value.
  - `web_user_agent` returns a desktop browser user agent.
- `katana.utils.formfields.parse_form_fields(html, base_url)` returns a `Form`
  for each form in a page. Each `Form` has its method, its action resolved
  against `base_url`, its enctype and its parameter names.
- `katana.utils.maps.merge_data_maps(target, source)` copies entries in order.

### Reporting results

- `katana.output.result` defines `Result`, `Request`, `Response`,
  `HttpResponse` and `ErrorRecord`. `to_dict()` gives their JSON form and
  leaves out empty members.
- `katana.output.writer.StandardWriter(OutputOptions(...))` writes results to
  standard output, and also to an output file if one is set. Output is either
  screen text or JSON. The writer can:
  - select fields (`url`, `path`, `fqdn`, `rdn`, `rurl`, `qurl`, `qpath`, `file`, `ufile`, `key`, `value`, `kv`, `dir`, `udir`, and custom fields);
  - append field values to per-host files;
  - store raw requests and responses under a directory with an `index.txt`;
  - keep or drop results by regular expression or by a condition in the expression language of `katana.output.dsl` (`evaluate(expression, values)`).

  Rejected results raise `OutputError`. `write_error` appends `ErrorRecord`s
  as JSON lines to an error log.
- Custom fields are read from a YAML file by `katana.output.custom_field`.
  If no file is given, `init_custom_field_config_file()` creates
  `~/.config/katana/field-config.yaml` with a default `email` field.

### Putting it together

`katana.config.options.Options` holds the user settings. Its helpers are
`parse_custom_headers`, `parse_headless_optional_arguments`, `should_resume`
and `configure_output`. `configure_output` sets the level of the `katana`
logger. `katana.config.crawler_options.new_crawler_options(options)` builds a
`CrawlerOptions` from the settings. It holds an extension validator, a scope
manager, a `SimpleFilter`, a `StandardWriter` and, when a rate is set, a
`RateLimiter`.

## Example

```python
from urllib.parse import urlsplit

from katana.utils.scope import ScopeManager
from katana.utils.crawlqueue import CrawlQueue

scope = ScopeManager([], [r"logout\.php"], "rdn", False)
print(scope.validate(urlsplit("https://sub.example.com/index.php"), "example.com"))

queue = CrawlQueue("breadth-first", 1)
queue.push("https://example.com/a", 2)
queue.push("https://example.com/b", 1)
for item in queue.pop():
    print(item)
```

## What this package does not do

It has no crawling engine. It sends no HTTP requests, drives no headless
browser, detects no technologies and has no command-line program. Settings
such as `headless`, `proxy`, `resolvers`, `tech_detect` and `max_depth` are
stored in `Options`, but nothing in the package acts on them.