"""Single-page web UI: upload, preferences form, results."""

INDEX_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Menu Anxiety Solver</title>
  <style>
    :root{ --bg:#fff8f0; --card:#ffffff; --text:#2d2a26; --muted:#7a7268; --primary:#e4572e; --border:#eadfd3; --warn:#fff3cd; }
    *{ box-sizing:border-box; }
    body{ margin:0; background:var(--bg); color:var(--text); font:16px/1.5 system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif; }
    .container{ max-width:760px; margin-inline:auto; padding:1.25rem; }
    .app-header{ text-align:center; padding:1.5rem 0 .5rem; }
    .app-header h1{ margin:0; }
    .tagline{ color:var(--muted); margin:.25rem 0 0; }
    .card{ background:var(--card); border:1px solid var(--border); border-radius:1rem; padding:1.25rem; margin:1rem 0; }
    #file-upload{ display:none; }
    .upload-label{ display:block; text-align:center; padding:1.5rem; border:2px dashed var(--border); border-radius:1rem; cursor:pointer; }
    .image-preview img{ max-width:100%; border-radius:.75rem; margin-top:1rem; }
    .input-group{ margin:.75rem 0; }
    .input-group label{ display:block; font-weight:600; margin-bottom:.25rem; }
    .input-group input{ width:100%; padding:.6rem .75rem; border:1px solid var(--border); border-radius:.6rem; font:inherit; }
    .analyze-button{ width:100%; padding:.9rem; border:0; border-radius:.8rem; background:var(--primary); color:#fff; font-size:1.05rem; cursor:pointer; }
    .analyze-button:disabled{ opacity:.5; cursor:not-allowed; }
    .error-message{ background:#fde2e1; border:1px solid #f5b5b2; border-radius:.8rem; padding:.9rem; margin:1rem 0; }
    .card-header{ display:flex; justify-content:space-between; align-items:baseline; gap:1rem; }
    .card-header h3{ margin:0; }
    .price{ font-weight:700; color:var(--primary); }
    .warnings{ background:var(--warn); border-radius:.6rem; padding:.6rem .75rem; margin:.5rem 0; }
    .value-score{ display:flex; gap:.5rem; align-items:center; color:var(--muted); }
    [hidden]{ display:none !important; }
  </style>
</head>
<body>
  <div class="container">
    <header class="app-header">
      <h1>🍽️ Menu Anxiety Solver</h1>
      <p class="tagline">Upload a menu and let AI pick the perfect dish for you!</p>
    </header>

    <section class="card upload-section">
      <input type="file" accept="image/*" id="file-upload" />
      <label for="file-upload" class="upload-label" id="upload-label">📸 Upload Menu Photo</label>
      <div class="image-preview" id="image-preview" hidden><img id="preview-img" alt="Menu preview" /></div>
    </section>

    <section class="card preferences-section">
      <h2>Tell us your preferences</h2>
      <div class="input-group">
        <label for="dietary">Dietary Restrictions</label>
        <input id="dietary" type="text" placeholder="e.g., vegetarian, gluten-free, no shellfish" />
      </div>
      <div class="input-group">
        <label for="budget">Budget ($)</label>
        <input id="budget" type="number" min="0" placeholder="e.g., 25" />
      </div>
      <div class="input-group">
        <label for="mood">What are you craving?</label>
        <input id="mood" type="text" placeholder="e.g., something comforting, light and fresh, spicy" />
      </div>
    </section>

    <button id="analyze-button" class="analyze-button" disabled>✨ Get My Recommendations</button>

    <div class="error-message" id="error-message" hidden><strong>⚠️ Error:</strong> <span id="error-text"></span></div>

    <section class="recommendations" id="recommendations" hidden>
      <h2>🎯 Your Perfect Picks</h2>
      <div id="recommendation-list"></div>
    </section>
  </div>

  <script>
    const fileInput = document.getElementById("file-upload");
    const button = document.getElementById("analyze-button");
    const errorBox = document.getElementById("error-message");
    const results = document.getElementById("recommendations");
    let image = null;
    let loading = false;

    function escapeHtml(value) {
      const div = document.createElement("div");
      div.textContent = value == null ? "" : String(value);
      return div.innerHTML;
    }

    function refreshButton() {
      button.disabled = !image || loading;
      button.textContent = loading ? "🔍 Analyzing Menu..." : "✨ Get My Recommendations";
    }

    function showError(message) {
      document.getElementById("error-text").textContent = message;
      errorBox.hidden = !message;
    }

    function renderCards(cards) {
      document.getElementById("recommendation-list").innerHTML = cards.map((card) => `
        <div class="card recommendation-card">
          <div class="card-header"><h3>${escapeHtml(card.dish)}</h3><span class="price">$${escapeHtml(card.price)}</span></div>
          <p class="reasoning">${escapeHtml(card.reasoning)}</p>
          ${card.warning ? `<div class="warnings"><strong>⚠️ Note:</strong> ${escapeHtml(card.warning)}</div>` : ""}
          <div class="value-score"><span class="label">Value Score:</span><span class="stars">${card.stars}</span><span class="score">${escapeHtml(card.value_score)}/10</span></div>
        </div>`).join("");
      results.hidden = false;
    }

    fileInput.addEventListener("change", (event) => {
      const file = event.target.files && event.target.files[0];
      if (!file) return;
      image = file;
      const reader = new FileReader();
      reader.onloadend = () => {
        document.getElementById("preview-img").src = reader.result;
        document.getElementById("image-preview").hidden = false;
      };
      reader.readAsDataURL(file);
      document.getElementById("upload-label").textContent = "✓ Menu uploaded - Click to change";
      results.hidden = true;
      showError("");
      refreshButton();
    });

    button.addEventListener("click", async () => {
      if (!image) {
        showError("Please upload a menu image first!");
        return;
      }
      loading = true;
      refreshButton();
      showError("");
      results.hidden = true;

      const form = new FormData();
      form.append("image", image);
      for (const field of ["dietary", "budget", "mood"]) {
        form.append(field, document.getElementById(field).value);
      }

      try {
        const response = await fetch("/api/analyze", { method: "POST", body: form });
        const body = await response.json();
        if (!response.ok) {
          showError(body.error || "Failed to analyze menu. Please try again.");
        } else {
          renderCards(body.cards);
        }
      } catch (err) {
        showError("Failed to analyze menu. Please try again.");
      } finally {
        loading = false;
        refreshButton();
      }
    });
  </script>
</body>
</html>
"""
