# fineprint

Building blocks for watching how companies change their Terms of Service,
Privacy Policies and similar documents, and for telling people about it.

## What is inside

- `fineprint.diff` – text differencing:
  - `fineprint.diff.ndiff.strings(before, after)` computes minimal `Edit`s
    (byte offsets, rune-aware for non-ASCII text).
  - `fineprint.diff.core.apply`, `sort_edits`, `line_edits` and `merge` work
    with lists of `Edit`s.
  - `fineprint.diff.unified.unified(old_label, new_label, old, new)` renders a
    unified diff that `patch` accepts.
  - `fineprint.diff.myers.compute_edits` is a line-based Myers diff.
  - `fineprint.diff.lcs` holds the longest-common-subsequence engine.
- `fineprint.htmlutil.extract_text` – the visible text of an HTML body.
- `fineprint.webarchive` – list and load Wayback Machine snapshots, with the
  archive toolbar stripped out before text extraction.
- `fineprint.tosdr` – search ToS;DR and fetch a service's review points.
- `fineprint.claude` – classify inbound e-mails as policy changes and have a
  model summarise a policy or a diff between two versions.
- `fineprint.postmark` – parse inbound e-mail webhooks and send replies.
- `fineprint.ratelimit` – a sliding-window rate limiter per key.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from fineprint.diff.unified import unified

old = "You may delete your data.\nWe do not sell data.\n"
new = "You may delete your data.\nWe may share data with partners.\n"
print(unified("previous", "current", old, new))
```

```
--- previous
+++ current
@@ -1,2 +1,2 @@
 You may delete your data.
-We do not sell data.
+We may share data with partners.
```

Rate limiting a sender:

```python
from datetime import timedelta
from fineprint.ratelimit import RateLimiter

limiter = RateLimiter()
if limiter.is_allowed("someone@example.com", 5, timedelta(hours=1)):
    ...
limiter.stop()
```

The network clients need credentials of your own: an Anthropic API key for
`fineprint.claude` and a Postmark server token for `fineprint.postmark`.