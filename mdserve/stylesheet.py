"""Presentational markup injected into the head of every rendered page."""

from __future__ import annotations

from .config import BODY_CLASS

STYLESHEET = """
@media (prefers-color-scheme: dark) {
  .%(body)s {
    color-scheme: dark;
    --color-fg-default: #c9d1d9;
    --color-fg-muted: #8b949e;
    --color-fg-subtle: #484f58;
    --color-canvas-default: #0d1117;
    --color-canvas-subtle: #161b22;
    --color-border-default: #30363d;
    --color-border-muted: #21262d;
    --color-neutral-muted: rgba(110,118,129,0.4);
    --color-accent-fg: #58a6ff;
    --color-accent-emphasis: #1f6feb;
    --color-attention-subtle: rgba(187,128,9,0.15);
    --color-danger-fg: #f85149;
  }
}

@media (prefers-color-scheme: light) {
  .%(body)s {
    color-scheme: light;
    --color-fg-default: #24292f;
    --color-fg-muted: #57606a;
    --color-fg-subtle: #6e7781;
    --color-canvas-default: #ffffff;
    --color-canvas-subtle: #f6f8fa;
    --color-border-default: #d0d7de;
    --color-border-muted: hsla(210,18%%,87%%,1);
    --color-neutral-muted: rgba(175,184,193,0.2);
    --color-accent-fg: #0969da;
    --color-accent-emphasis: #0969da;
    --color-attention-subtle: #fff8c5;
    --color-danger-fg: #cf222e;
  }
}

.%(body)s {
  box-sizing: border-box;
  max-width: 980px;
  margin: 0 auto;
  padding: 45px;
  -ms-text-size-adjust: 100%%;
  -webkit-text-size-adjust: 100%%;
  color: var(--color-fg-default);
  background-color: var(--color-canvas-default);
  font-family: -apple-system,BlinkMacSystemFont,"Segoe UI","Noto Sans",Helvetica,Arial,sans-serif;
  font-size: 16px;
  line-height: 1.5;
  word-wrap: break-word;
}

@media (max-width: 767px) {
  .%(body)s {
    padding: 15px;
  }
}

.%(body)s a {
  color: var(--color-accent-fg);
  text-decoration: none;
}

.%(body)s a:hover {
  text-decoration: underline;
}

.%(body)s h1,
.%(body)s h2,
.%(body)s h3,
.%(body)s h4,
.%(body)s h5,
.%(body)s h6 {
  margin-top: 24px;
  margin-bottom: 16px;
  font-weight: 600;
  line-height: 1.25;
}

.%(body)s h1 {
  padding-bottom: .3em;
  font-size: 2em;
  border-bottom: 1px solid var(--color-border-muted);
}

.%(body)s h2 {
  padding-bottom: .3em;
  font-size: 1.5em;
  border-bottom: 1px solid var(--color-border-muted);
}

.%(body)s h3 {
  font-size: 1.25em;
}

.%(body)s h4 {
  font-size: 1em;
}

.%(body)s h5 {
  font-size: .875em;
}

.%(body)s h6 {
  font-size: .85em;
  color: var(--color-fg-muted);
}

.%(body)s p,
.%(body)s blockquote,
.%(body)s ul,
.%(body)s ol,
.%(body)s dl,
.%(body)s table,
.%(body)s pre,
.%(body)s details {
  margin-top: 0;
  margin-bottom: 16px;
}

.%(body)s blockquote {
  margin: 0;
  padding: 0 1em;
  color: var(--color-fg-muted);
  border-left: .25em solid var(--color-border-default);
}

.%(body)s ul,
.%(body)s ol {
  padding-left: 2em;
}

.%(body)s hr {
  box-sizing: content-box;
  height: .25em;
  padding: 0;
  margin: 24px 0;
  background-color: var(--color-border-default);
  border: 0;
}

.%(body)s img {
  max-width: 100%%;
  box-sizing: content-box;
  background-color: var(--color-canvas-default);
}

.%(body)s code,
.%(body)s tt {
  padding: .2em .4em;
  margin: 0;
  font-size: 85%%;
  white-space: break-spaces;
  background-color: var(--color-neutral-muted);
  border-radius: 6px;
}

.%(body)s code,
.%(body)s pre {
  font-family: ui-monospace,SFMono-Regular,SF Mono,Menlo,Consolas,Liberation Mono,monospace;
}

.%(body)s pre {
  padding: 16px;
  overflow: auto;
  font-size: 85%%;
  line-height: 1.45;
  background-color: var(--color-canvas-subtle);
  border-radius: 6px;
  word-wrap: normal;
}

.%(body)s pre code {
  display: inline;
  padding: 0;
  margin: 0;
  overflow: visible;
  line-height: inherit;
  word-wrap: normal;
  background-color: transparent;
  border: 0;
  font-size: 100%%;
  white-space: pre;
}

.%(body)s table {
  display: block;
  width: max-content;
  max-width: 100%%;
  overflow: auto;
  border-spacing: 0;
  border-collapse: collapse;
}

.%(body)s table th {
  font-weight: 600;
}

.%(body)s table th,
.%(body)s table td {
  padding: 6px 13px;
  border: 1px solid var(--color-border-default);
}

.%(body)s table tr {
  background-color: var(--color-canvas-default);
  border-top: 1px solid var(--color-border-muted);
}

.%(body)s table tr:nth-child(2n) {
  background-color: var(--color-canvas-subtle);
}

.%(body)s mark {
  background-color: var(--color-attention-subtle);
  color: var(--color-fg-default);
}

.%(body)s :target {
  scroll-margin-top: 16px;
}
""" % {"body": BODY_CLASS}

STYLE_BLOCK = (
    '<meta name="viewport" content="width=device-width, initial-scale=1">'
    "<style>" + STYLESHEET + "</style>"
)
