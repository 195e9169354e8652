"""Single-page browser UI that consumes the photo shoot API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["ui"])


@router.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the photo shoot studio page."""
    return HTMLResponse(_INDEX_HTML)


_INDEX_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>AI Photo Shoot Studio</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem;
             background: #111827; color: #e5e7eb; }
      h1 { margin-bottom: 0.5rem; }
      .grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 1.5rem; }
      .upload { border: 2px dashed #4b5563; border-radius: 8px; min-height: 220px;
                display: flex; align-items: center; justify-content: center;
                cursor: pointer; overflow: hidden; }
      .upload img, .card img { max-width: 100%; max-height: 320px; }
      textarea { width: 100%; min-height: 200px; background: #1f2937;
                 color: inherit; border: 1px solid #4b5563; border-radius: 8px; }
      .styles button.active { background: #6366f1; color: white; }
      button { padding: 0.5rem 1rem; margin: 0.25rem; border-radius: 6px; }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      .error { background: #7f1d1d; padding: 0.75rem; border-radius: 8px; margin: 1rem 0; }
      .card { background: #1f2937; padding: 1rem; border-radius: 8px; text-align: center; }
      .history-row { display: flex; align-items: center; gap: 1rem; margin: 0.5rem 0; }
      .history-row img { width: 64px; height: 64px; object-fit: cover; }
      .hidden { display: none; }
    </style>
  </head>
  <body>
    <h1>AI Photo Shoot Studio</h1>
    <p>Upload a person and an accessory, describe a scene and pick a style.</p>
    <div class="grid">
      <div>
        <h3>1. Person photo</h3>
        <div class="upload" onclick="pick('person')" id="person-area">Click to upload</div>
        <input class="hidden" type="file" id="person-input"
               accept="image/png, image/jpeg, image/webp" onchange="upload('person', this)" />
      </div>
      <div>
        <h3>2. Accessory photo</h3>
        <div class="upload" onclick="pick('accessory')" id="accessory-area">Click to upload</div>
        <input class="hidden" type="file" id="accessory-input"
               accept="image/png, image/jpeg, image/webp" onchange="upload('accessory', this)" />
      </div>
      <div>
        <h3>3. Describe the scenario</h3>
        <textarea id="scenario" onchange="saveScenario(this.value)"
          placeholder="e.g. an urban street in Tokyo at night, a cafe in Paris..."></textarea>
      </div>
    </div>
    <div class="styles" id="styles"></div>
    <button id="generate" onclick="generate()" disabled>Generate photo shoot</button>
    <span id="progress"></span>
    <div id="error" class="error hidden"></div>
    <div class="grid" id="results"></div>
    <h2>History <button onclick="clearHistory()">Clear history</button></h2>
    <div id="history"></div>
    <script>
      let state = null;
      let showOriginal = {};
      let shownImages = null;

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const data = await res.json();
        if (!res.ok) {
          showError(data.detail || ('Error: ' + res.status));
          return null;
        }
        render(data);
        return data;
      }

      function showError(message) {
        const el = document.getElementById('error');
        el.textContent = message ? 'Error: ' + message : '';
        el.classList.toggle('hidden', !message);
      }

      function pick(slot) { document.getElementById(slot + '-input').click(); }

      function upload(slot, input) {
        const file = input.files[0];
        if (!file) return;
        const reader = new FileReader();
        reader.onloadend = () => call('PUT', '/api/inputs/' + slot, { image: reader.result });
        reader.readAsDataURL(file);
      }

      function saveScenario(value) {
        return call('PUT', '/api/inputs/scenario', { scenario: value });
      }

      function chooseStyle(style) { return call('PUT', '/api/inputs/style', { style }); }

      async function generate() {
        if (!(await saveScenario(document.getElementById('scenario').value))) return;
        const poll = setInterval(() => call('GET', '/api/state'), 1000);
        try {
          await call('POST', '/api/generate');
        } finally {
          clearInterval(poll);
        }
      }

      function clearHistory() { call('DELETE', '/api/history'); }
      function loadSession(id) { call('POST', '/api/history/' + encodeURIComponent(id) + '/load'); }
      function deleteSession(id) { call('DELETE', '/api/history/' + encodeURIComponent(id)); }

      function toggle(index) {
        showOriginal[index] = !showOriginal[index];
        render(state);
      }

      function el(tag, text) {
        const node = document.createElement(tag);
        if (text !== undefined) node.textContent = text;
        return node;
      }

      function image(src) {
        const node = document.createElement('img');
        node.src = src;
        return node;
      }

      function button(label, onClick, active) {
        const node = el('button', label);
        if (active) node.className = 'active';
        node.addEventListener('click', onClick);
        return node;
      }

      function preview(id, src) {
        document.getElementById(id).replaceChildren(src ? image(src) : 'Click to upload');
      }

      function render(data) {
        state = data;
        const images = JSON.stringify(data.generatedImages.map((img) => img.src));
        if (images !== shownImages) {
          showOriginal = {};
          shownImages = images;
        }
        preview('person-area', data.personImage);
        preview('accessory-area', data.accessoryImage);
        const scenario = document.getElementById('scenario');
        if (document.activeElement !== scenario) scenario.value = data.scenario;
        document.getElementById('styles').replaceChildren(...STYLES.map((s) =>
          button(s, () => chooseStyle(s), s === data.style)));
        document.getElementById('generate').disabled = !(data.personImage &&
          data.accessoryImage && scenario.value.trim() && !data.isBusy);
        document.getElementById('progress').textContent =
          data.isBusy ? (data.progressMessage || 'Generating...') : '';
        showError(data.error);
        document.getElementById('results').replaceChildren(...data.generatedImages.map((img, i) => {
          const card = el('div');
          card.className = 'card';
          card.append(el('h3', img.title));
          const src = showOriginal[i] ? img.original : img.src;
          card.append(src ? image(src) : el('p', 'Generating...'));
          if (img.src) {
            card.append(button(showOriginal[i] ? 'Show generated' : 'Show original',
              () => toggle(i)));
          }
          return card;
        }));
        document.getElementById('history').replaceChildren(...data.history.map((h) => {
          const row = el('div');
          row.className = 'history-row';
          h.thumbnails.forEach((src) => row.append(image(src)));
          const info = el('div');
          info.append(el('div', new Date(h.timestamp).toLocaleString() + ' - Style: ' + h.style));
          info.append(el('div', h.scenario));
          row.append(info, button('Load', () => loadSession(h.id)),
            button('Delete', () => deleteSession(h.id)));
          return row;
        }));
      }

      let STYLES = [];
      fetch('/api/styles').then((r) => r.json()).then((data) => {
        STYLES = data.styles;
        call('GET', '/api/state');
      });
    </script>
  </body>
</html>
"""
