"""
Admin UI.

Single self-contained page: the admin secret is kept in localStorage, the
form state survives reloads, uploads go through /api/data and open the
rendered template in a new tab. The records panel lists and deletes stored
records through /api/list and /api/delete.
"""

SECRET_STORAGE_KEY = "report_admin_secret"
FORM_STORAGE_KEY = "report_admin_form"


def build_admin_html(default_width: int, default_height: int) -> str:
    """Build the admin page with the configured default paper size."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Report Renderer Admin</title>
    <style>
        body {{ font-family: Arial, Helvetica, sans-serif; margin: 0; background: #f5f5f4; color: #1f2a38; }}
        main {{ max-width: 880px; margin: 0 auto; padding: 24px; }}
        h1 {{ font-size: 20px; margin: 0 0 16px 0; }}
        h2 {{ font-size: 15px; margin: 0 0 12px 0; }}
        section {{ background: white; border: 1px solid #e2e0df; border-radius: 6px; padding: 16px; margin-bottom: 16px; }}
        label {{ display: block; font-size: 12px; font-weight: 600; margin: 10px 0 4px 0; }}
        input, select, textarea {{ width: 100%; box-sizing: border-box; padding: 6px 8px; font-size: 13px; border: 1px solid #d1d5db; border-radius: 4px; }}
        textarea {{ min-height: 260px; font-family: monospace; border-width: 2px; }}
        textarea.valid {{ border-color: #16a34a; }}
        textarea.invalid {{ border-color: #dc2626; }}
        .row {{ display: flex; gap: 12px; }}
        .row > div {{ flex: 1; }}
        .inline {{ display: flex; align-items: center; gap: 6px; margin-top: 10px; }}
        .inline input {{ width: auto; }}
        button {{ padding: 7px 14px; font-size: 13px; border: 0; border-radius: 4px; background: #065f4a; color: white; cursor: pointer; margin-top: 12px; }}
        button.secondary {{ background: #6b7280; }}
        button.danger {{ background: #b91c1c; margin-top: 0; }}
        button:disabled {{ opacity: 0.5; cursor: default; }}
        #status {{ font-size: 12px; min-height: 16px; margin-top: 8px; }}
        table {{ width: 100%; border-collapse: collapse; font-size: 12px; }}
        td, th {{ border-bottom: 1px solid #e2e0df; padding: 6px; text-align: left; vertical-align: top; }}
        td.preview {{ font-family: monospace; color: #4b5563; word-break: break-all; }}
    </style>
</head>
<body>
<main>
    <h1>Report Renderer Admin</h1>

    <section>
        <label for="secret">Admin secret</label>
        <div class="row">
            <div><input id="secret" type="password" autocomplete="off"></div>
            <div style="flex: 0"><button class="secondary" id="logout" style="margin-top: 0">Clear</button></div>
        </div>
    </section>

    <section>
        <h2>Upload</h2>
        <label for="template">Template</label>
        <select id="template"></select>

        <label for="json">JSON payload</label>
        <textarea id="json" spellcheck="false"></textarea>

        <div class="row">
            <div>
                <label for="paperWidth">Paper width (px)</label>
                <input id="paperWidth" type="number" min="100" max="5000">
            </div>
            <div>
                <label for="paperHeight">Paper height (px)</label>
                <input id="paperHeight" type="number" min="100" max="5000">
            </div>
        </div>

        <div class="inline">
            <input id="testMode" type="checkbox">
            <span>Test mode (keep the record after opening)</span>
        </div>

        <button id="upload">Upload &amp; open</button>
        <button class="secondary" id="reset">Reset form</button>
        <div id="status"></div>
    </section>

    <section>
        <h2>Records</h2>
        <button class="secondary" id="refresh" style="margin-top: 0">Load records</button>
        <table>
            <thead><tr><th>ID</th><th>Payload</th><th></th></tr></thead>
            <tbody id="records"></tbody>
        </table>
    </section>
</main>
<script>
(() => {{
    const SECRET_KEY = "{SECRET_STORAGE_KEY}";
    const FORM_KEY = "{FORM_STORAGE_KEY}";
    const defaults = {{ json: "", template: "", paperWidth: "{default_width}", paperHeight: "{default_height}", testMode: false }};
    const $ = (id) => document.getElementById(id);

    function loadForm() {{
        try {{
            return Object.assign({{}}, defaults, JSON.parse(localStorage.getItem(FORM_KEY) || "{{}}"));
        }} catch (e) {{
            return Object.assign({{}}, defaults);
        }}
    }}

    function readForm() {{
        return {{
            json: $("json").value,
            template: $("template").value,
            paperWidth: $("paperWidth").value,
            paperHeight: $("paperHeight").value,
            testMode: $("testMode").checked,
        }};
    }}

    function applyForm(form) {{
        $("json").value = form.json;
        $("paperWidth").value = form.paperWidth;
        $("paperHeight").value = form.paperHeight;
        $("testMode").checked = form.testMode;
        if (form.template) $("template").value = form.template;
        validate();
    }}

    function setStatus(text, isError) {{
        $("status").textContent = text;
        $("status").style.color = isError ? "#b91c1c" : "#065f4a";
    }}

    function validate() {{
        const area = $("json");
        area.classList.remove("valid", "invalid");
        if (!area.value.trim()) return false;
        try {{
            JSON.parse(area.value);
            area.classList.add("valid");
            return true;
        }} catch (e) {{
            area.classList.add("invalid");
            return false;
        }}
    }}

    function save() {{
        localStorage.setItem(FORM_KEY, JSON.stringify(readForm()));
    }}

    async function upload() {{
        const secret = $("secret").value;
        if (!secret) return setStatus("Enter the admin secret first", true);
        if (!validate()) return setStatus("Payload is not valid JSON", true);
        const form = readForm();
        $("upload").disabled = true;
        setStatus("Saving to database...");
        try {{
            const res = await fetch("/api/data", {{
                method: "POST",
                headers: {{ "Content-Type": "application/json", "x-admin-secret": secret }},
                body: form.json.trim(),
            }});
            const body = await res.json();
            if (!res.ok) throw new Error(body.detail || "Request failed");
            const params = new URLSearchParams({{ uuid: body.uuid, paperWidth: form.paperWidth, paperHeight: form.paperHeight }});
            if (form.testMode) params.set("test", "true");
            window.open(`/${{form.template}}?${{params.toString()}}`, "_blank");
            setStatus(`Record created: ${{body.uuid}}`);
        }} catch (e) {{
            setStatus(`Could not upload: ${{e.message}}`, true);
        }} finally {{
            $("upload").disabled = false;
        }}
    }}

    async function refresh() {{
        const secret = $("secret").value;
        const tbody = $("records");
        tbody.innerHTML = "";
        const res = await fetch("/api/list", {{ headers: {{ "x-admin-secret": secret }} }});
        if (!res.ok) return setStatus("Could not list records", true);
        const body = await res.json();
        body.items.forEach((item) => {{
            const row = document.createElement("tr");
            const id = document.createElement("td");
            id.textContent = item.id;
            const preview = document.createElement("td");
            preview.className = "preview";
            preview.textContent = item.json.slice(0, 160);
            const actions = document.createElement("td");
            const del = document.createElement("button");
            del.className = "danger";
            del.textContent = "Delete";
            del.onclick = () => remove(item.id);
            actions.appendChild(del);
            row.append(id, preview, actions);
            tbody.appendChild(row);
        }});
        setStatus(`${{body.count}} records`);
    }}

    async function remove(id) {{
        if (!confirm(`Delete record ${{id}}?`)) return;
        const res = await fetch("/api/delete", {{
            method: "POST",
            headers: {{ "Content-Type": "application/json", "x-admin-secret": $("secret").value }},
            body: JSON.stringify({{ id }}),
        }});
        if (!res.ok) return setStatus(`Could not delete ${{id}}`, true);
        await refresh();
    }}

    $("secret").value = localStorage.getItem(SECRET_KEY) || "";
    $("secret").addEventListener("change", () => localStorage.setItem(SECRET_KEY, $("secret").value));
    $("logout").onclick = () => {{ localStorage.removeItem(SECRET_KEY); $("secret").value = ""; }};
    $("reset").onclick = () => {{ localStorage.removeItem(FORM_KEY); applyForm(defaults); }};
    $("upload").onclick = upload;
    $("refresh").onclick = refresh;
    ["json", "template", "paperWidth", "paperHeight", "testMode"].forEach((id) => $(id).addEventListener("change", save));
    $("json").addEventListener("input", validate);

    fetch("/api/templates")
        .then((r) => r.json())
        .then((d) => {{
            d.templates.forEach((name) => {{
                const option = document.createElement("option");
                option.value = name;
                option.textContent = name;
                $("template").appendChild(option);
            }});
            applyForm(loadForm());
        }})
        .catch(() => applyForm(loadForm()));
}})();
</script>
</body>
</html>
"""
