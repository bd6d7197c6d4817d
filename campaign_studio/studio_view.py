"""Routes for the browser studio page that drives campaign generation."""
from __future__ import annotations

import html
from typing import Iterable, List, Optional

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from campaign_studio.config import get_settings
from campaign_studio.schemas.campaign import DEFAULT_PLATFORM, DEFAULT_TONE

router = APIRouter()

PLATFORM_OPTIONS: List[str] = ["Instagram", "LinkedIn", "Twitter", "WhatsApp Status"]
TONE_OPTIONS: List[str] = ["Friendly", "Premium", "Funny", "Emotional"]
REGENERATE_TONE_OPTIONS: List[str] = ["Friendly", "Premium", "Funny", "Emotional", "Bold"]
DEFAULT_REGENERATE_TONE = "Funny"
COPIED_FEEDBACK_MS = 1200

_STYLES = """
    body { font-family: Arial, sans-serif; background: #000; color: #fff; margin: 0; }
    main { max-width: 48rem; margin: 0 auto; padding: 2.5rem 1rem; }
    h1 { margin-bottom: 0.5rem; }
    .subtitle { color: #9ca3af; font-size: 0.875rem; margin-bottom: 1.5rem; }
    form, .card { background: #18181b; border: 1px solid #3f3f46; border-radius: 0.75rem; padding: 1rem; }
    form > * { margin-bottom: 0.75rem; }
    input[type=text], textarea, select { width: 100%; box-sizing: border-box; padding: 0.5rem;
        background: #09090b; color: #fff; border: 1px solid #3f3f46; border-radius: 0.25rem; }
    .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 0.75rem; }
    .label { color: #a1a1aa; font-size: 0.75rem; }
    label.option { display: flex; align-items: center; gap: 0.5rem; font-size: 0.75rem; }
    button { cursor: pointer; }
    button:disabled { opacity: 0.5; cursor: default; }
    .primary { background: #4f46e5; color: #fff; border: 0; border-radius: 0.25rem; padding: 0.5rem 1rem; font-weight: 600; }
    .copy, .secondary { font-size: 0.75rem; padding: 0.25rem 0.5rem; background: transparent; color: #fff;
        border: 1px solid #52525b; border-radius: 0.25rem; }
    .error { color: #f87171; background: rgba(127, 29, 29, 0.3); border: 1px solid #b91c1c;
        padding: 0.75rem; border-radius: 0.25rem; font-size: 0.875rem; }
    .note { color: #fbbf24; font-size: 0.75rem; }
    .card { margin-top: 1rem; }
    .card header { display: flex; justify-content: space-between; align-items: center; }
    .pre { white-space: pre-line; font-size: 0.875rem; }
    [hidden] { display: none !important; }
"""

_SCRIPT = """
const form = document.getElementById("campaign-form");
const submitButton = document.getElementById("submit-button");
const regenerateRow = document.getElementById("regenerate-row");
const regenerateButton = document.getElementById("regenerate-button");
const regenerateTone = document.getElementById("regenerate-tone");
const errorBanner = document.getElementById("error");
const results = document.getElementById("results");
let lastPayload = null;

function setLoading(loading) {
  submitButton.disabled = loading;
  regenerateButton.disabled = loading;
  submitButton.textContent = loading ? "Generating..." : "Generate Campaign";
  regenerateButton.textContent = loading ? "Regenerating..." : "Regenerate";
}

function showError(message) {
  errorBanner.textContent = message;
  errorBanner.hidden = !message;
}

async function callApi(payload) {
  const res = await fetch("/api/generate-campaign", {
    method: "POST",
    headers: { "Content-Type": "application/json" },
    body: JSON.stringify(payload),
  });
  const data = await res.json();
  if (!res.ok) throw new Error(data.error || "Failed to generate");
  return data;
}

function setSection(name, display, copyText) {
  document.querySelector(`[data-field="${name}"]`).replaceChildren(display);
  document.querySelector(`[data-copy="${name}"]`).dataset.text = copyText || "";
}

function textNode(value) {
  const p = document.createElement("p");
  p.className = "pre";
  p.textContent = value || "";
  return p;
}

function render(result) {
  const hooks = result.hooks || [];
  const hashtags = result.hashtags || [];
  const captions = result.captions || [];

  setSection("tagline", textNode(result.tagline), result.tagline);
  setSection("brand_story", textNode(result.brand_story), result.brand_story);

  const list = document.createElement("ul");
  hooks.forEach((hook) => {
    const li = document.createElement("li");
    li.textContent = hook;
    list.appendChild(li);
  });
  setSection("hooks", list, hooks.join("\\n"));
  setSection("hashtags", textNode(hashtags.join(" ")), hashtags.join(" "));

  const captionBlock = document.createElement("div");
  captions.forEach((caption, i) => {
    const title = document.createElement("p");
    title.textContent = `Caption ${i + 1}`;
    captionBlock.appendChild(title);
    captionBlock.appendChild(textNode(caption));
  });
  setSection(
    "captions",
    captionBlock,
    captions.map((c, i) => `Caption ${i + 1}:\\n${c}`).join("\\n\\n"),
  );

  setSection("translated_caption_hi", textNode(result.translated_caption_hi), result.translated_caption_hi);
  setSection("translated_caption_kn", textNode(result.translated_caption_kn), result.translated_caption_kn);

  const note = document.getElementById("note");
  note.textContent = result.note || "";
  note.hidden = !result.note;

  results.hidden = false;
  regenerateRow.hidden = false;
}

async function run(payload) {
  setLoading(true);
  showError("");
  try {
    const data = await callApi(payload);
    render(data);
    lastPayload = payload;
  } catch (err) {
    showError(err.message || "Unknown error");
  } finally {
    setLoading(false);
  }
}

form.addEventListener("submit", async (event) => {
  event.preventDefault();
  results.hidden = true;
  regenerateRow.hidden = true;
  const formData = new FormData(form);
  const platforms = formData.getAll("platforms");
  const payload = {
    productName: (formData.get("productName") || "").toString(),
    description: (formData.get("description") || "").toString(),
    audience: (formData.get("audience") || "").toString(),
    platform: platforms.length > 0 ? platforms.join("__SEPARATOR__") : "__DEFAULT_PLATFORM__",
    tone: (formData.get("tone") || "__DEFAULT_TONE__").toString(),
  };
  await run(payload);
});

regenerateButton.addEventListener("click", async () => {
  if (!lastPayload) return;
  await run({ ...lastPayload, tone: regenerateTone.value });
});

document.querySelectorAll("button.copy").forEach((button) => {
  button.addEventListener("click", async () => {
    try {
      await navigator.clipboard.writeText(button.dataset.text || "");
      button.textContent = "Copied";
      setTimeout(() => { button.textContent = "Copy"; }, __COPIED_MS__);
    } catch (e) {
      console.error("Copy failed:", e);
    }
  });
});
"""

_SECTIONS = [
    ("tagline", "Tagline"),
    ("brand_story", "Brand Story"),
    ("hooks", "Hooks"),
    ("hashtags", "Hashtags"),
    ("captions", "Captions"),
    ("translated_caption_hi", "Hindi Caption"),
    ("translated_caption_kn", "Kannada Caption"),
]


def _options(values: Iterable[str], selected: Optional[str] = None) -> str:
    parts = []
    for value in values:
        escaped = html.escape(value)
        marker = " selected" if value == selected else ""
        parts.append(f'<option value="{escaped}"{marker}>{escaped}</option>')
    return "".join(parts)


def _platform_checkboxes(values: Iterable[str]) -> str:
    parts = []
    for value in values:
        escaped = html.escape(value)
        checked = " checked" if value == DEFAULT_PLATFORM else ""
        parts.append(
            '<label class="option">'
            f'<input type="checkbox" name="platforms" value="{escaped}"{checked}>'
            f"{escaped}</label>"
        )
    return "".join(parts)


def _result_section(field: str, title: str) -> str:
    return (
        '<div class="card">'
        f"<header><h2>{html.escape(title)}</h2>"
        f'<button type="button" class="copy" data-copy="{field}" data-text="">Copy</button>'
        "</header>"
        f'<div data-field="{field}"></div>'
        "</div>"
    )


def render_studio_page(app_name: str) -> str:
    script = (
        _SCRIPT.replace("__SEPARATOR__", ", ")
        .replace("__DEFAULT_PLATFORM__", DEFAULT_PLATFORM)
        .replace("__DEFAULT_TONE__", DEFAULT_TONE)
        .replace("__COPIED_MS__", str(COPIED_FEEDBACK_MS))
    )
    sections_html = "".join(_result_section(field, title) for field, title in _SECTIONS)
    title = html.escape(app_name)
    return f"""
    <html>
        <head>
            <meta charset="utf-8">
            <title>{title}</title>
            <style>{_STYLES}</style>
        </head>
        <body>
            <main>
                <h1>{title}</h1>
                <p class="subtitle">Enter product details and generate a full campaign using AI.</p>
                <form id="campaign-form">
                    <input type="text" name="productName" required
                        placeholder="Product name (e.g., Organic Cold Brew Coffee)">
                    <textarea name="description" required rows="3"
                        placeholder="Short description (what it is, key features, why it's special)"></textarea>
                    <input type="text" name="audience"
                        placeholder="Target audience (e.g., students, remote workers)">
                    <div class="grid">
                        <div>
                            <p class="label">Platforms (select one or more):</p>
                            {_platform_checkboxes(PLATFORM_OPTIONS)}
                        </div>
                        <div>
                            <p class="label">Primary tone:</p>
                            <select name="tone">{_options(TONE_OPTIONS, DEFAULT_TONE)}</select>
                        </div>
                    </div>
                    <button type="submit" id="submit-button" class="primary">Generate Campaign</button>
                </form>
                <p id="error" class="error" hidden></p>
                <div id="regenerate-row" hidden>
                    <span class="label">Try a different tone:</span>
                    <select id="regenerate-tone">{_options(REGENERATE_TONE_OPTIONS, DEFAULT_REGENERATE_TONE)}</select>
                    <button type="button" id="regenerate-button" class="secondary">Regenerate</button>
                </div>
                <section id="results" hidden>
                    <p id="note" class="note" hidden></p>
                    {sections_html}
                </section>
            </main>
            <script>{script}</script>
        </body>
    </html>
    """


@router.get("/", response_class=HTMLResponse)
async def view_studio() -> HTMLResponse:
    """Render the campaign studio form and results view."""
    return HTMLResponse(content=render_studio_page(get_settings().app_name))
