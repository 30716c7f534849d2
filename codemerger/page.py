"""Single-page front-end served at ``/``."""

INDEX_HTML = r"""
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <title>CodeMerger</title>
  <style>
    body {
      margin: 0;
      padding: 0;
      background-color: #1e1e1e;
      color: #ffffff;
      font-family: Arial, sans-serif;
    }
    .container {
      max-width: 900px;
      margin: auto;
      padding: 1rem;
    }
    h1 {
      margin: 0 0 1rem;
    }
    #dropZone {
      border: 2px dashed #555;
      border-radius: 4px;
      padding: 2rem;
      text-align: center;
      color: #ccc;
      cursor: pointer;
    }
    #dropZone.active {
      border-color: #007acc;
      background: #26323d;
    }
    #dropZone.busy {
      opacity: 0.5;
      cursor: not-allowed;
    }
    .panel {
      background: #2d2d2d;
      padding: 0.5rem;
      border-radius: 4px;
      margin-top: 1rem;
    }
    ul {
      list-style-type: none;
      margin: 0.5em 0;
      padding-left: 1.5em;
    }
    li {
      margin: 0.4em 0;
    }
    .file-row {
      display: flex;
      align-items: center;
      gap: 0.5rem;
      padding: 0.3rem;
      border: 1px solid #3a3a3a;
      border-radius: 4px;
      margin: 0.3rem 0;
      cursor: move;
    }
    .file-row.drag-over {
      border-color: #007acc;
    }
    .file-row .name {
      flex: 1;
      overflow: hidden;
      text-overflow: ellipsis;
      white-space: nowrap;
    }
    .folder-arrow {
      display: inline-block;
      width: 1.2em;
      color: #ccc;
      text-align: center;
      cursor: pointer;
    }
    .file-size {
      color: #999;
      font-size: 0.85em;
      margin-left: 0.3em;
    }
    .btnBar {
      display: flex;
      gap: 1rem;
      align-items: center;
      margin-top: 1rem;
    }
    button {
      padding: 0.6rem 1.2rem;
      background: #007acc;
      color: #ffffff;
      border: none;
      font-size: 1rem;
      cursor: pointer;
      border-radius: 4px;
    }
    button.small {
      padding: 0.2rem 0.5rem;
      font-size: 0.8rem;
    }
    button:hover {
      background: #005fa3;
    }
    button:disabled {
      opacity: 0.3;
      cursor: not-allowed;
    }
    textarea {
      width: 100%;
      height: 6rem;
      background: #1e1e1e;
      color: #fff;
      font-family: monospace;
    }
    #statsLine {
      margin: 1rem 0 0 0;
      font-size: 0.9rem;
      color: #ccc;
    }
    pre {
      white-space: pre-wrap;
      background: #2d2d2d;
      padding: 1rem;
      border-radius: 4px;
      max-height: 400px;
      overflow: auto;
    }
    pre:empty {
      display: none;
    }
  </style>
</head>
<body>
  <div class="container">
    <h1>CodeMerger</h1>
    <p>
      Drop project files or a .zip here. Folder structure inside a zip is kept
      in the file names. Paste text with Ctrl+V to add it as a file.
    </p>

    <div id="dropZone" tabindex="0">Drop files or a .zip here, or click to choose</div>
    <input id="fileInput" type="file" multiple hidden />

    <details class="panel">
      <summary>File header template</summary>
      <p>Use <code>{fileName}</code> for the file name.</p>
      <textarea id="templateInput"></textarea>
      <div class="btnBar">
        <button id="saveTemplateBtn" class="small">Apply</button>
        <button id="resetTemplateBtn" class="small">Reset to default</button>
      </div>
    </details>

    <div class="btnBar">
      <button id="listViewBtn">List</button>
      <button id="treeViewBtn">Folders</button>
      <button id="deleteSelectedBtn" hidden>Delete selected</button>
    </div>
    <div class="panel" id="files"></div>

    <h3>Project structure</h3>
    <div class="btnBar"><button id="copyStructureBtn">Copy structure</button></div>
    <pre id="structure"></pre>

    <div id="statsLine"></div>
    <div class="btnBar">
      <button id="copyBtn">Copy</button>
      <button id="downloadBtn">Download</button>
      <button id="clearBtn">Clear</button>
    </div>
    <pre id="result"></pre>
  </div>

  <script>
  let viewMode = 'list';
  let state = { files: [], selected: [], stats: null, processing: false };
  let dragFrom = null;

  window.onload = async function() {
    await loadTemplate();
    await refresh();
  };

  // ---------- API ----------
  async function api(url, method = 'GET', body = undefined) {
    const opts = { method };
    if (body !== undefined) {
      opts.headers = { 'Content-Type': 'application/json' };
      opts.body = JSON.stringify(body);
    }
    const res = await fetch(url, opts);
    const data = await res.json();
    if (!res.ok) { alert(data.error || 'Request failed'); return null; }
    return data;
  }

  async function applyState(data) {
    if (!data) return;
    state = data;
    await render();
  }

  async function refresh() { await applyState(await api('/api/files')); }

  // ---------- Upload ----------
  async function uploadFiles(fileList) {
    if (state.processing || !fileList || fileList.length === 0) return;
    const form = new FormData();
    for (const f of fileList) form.append('files', f, f.name);
    setBusy(true);
    try {
      const res = await fetch('/api/upload', { method: 'POST', body: form });
      const data = await res.json();
      if (!res.ok) { alert(data.error || 'Failed to process files'); return; }
      await applyState(data);
    } finally {
      setBusy(false);
    }
  }

  function setBusy(busy) {
    state.processing = busy;
    document.getElementById('dropZone').classList.toggle('busy', busy);
    document.getElementById('dropZone').textContent = busy
      ? 'Processing and extracting files...'
      : 'Drop files or a .zip here, or click to choose';
  }

  const dropZone = document.getElementById('dropZone');
  const fileInput = document.getElementById('fileInput');
  dropZone.onclick = () => { if (!state.processing) fileInput.click(); };
  fileInput.onchange = async () => { await uploadFiles(fileInput.files); fileInput.value = ''; };
  ['dragenter', 'dragover'].forEach(t => dropZone.addEventListener(t, e => {
    e.preventDefault(); dropZone.classList.add('active');
  }));
  dropZone.addEventListener('dragleave', e => { e.preventDefault(); dropZone.classList.remove('active'); });
  dropZone.addEventListener('drop', async e => {
    e.preventDefault(); dropZone.classList.remove('active');
    await uploadFiles(e.dataTransfer.files);
  });
  dropZone.addEventListener('paste', async e => {
    if (state.processing) return;
    if (e.clipboardData.files && e.clipboardData.files.length > 0) {
      e.preventDefault(); await uploadFiles(e.clipboardData.files); return;
    }
    const text = e.clipboardData.getData('text');
    if (text) { e.preventDefault(); await applyState(await api('/api/paste', 'POST', { text })); }
  });

  // ---------- Rendering ----------
  async function render() {
    const filesDiv = document.getElementById('files');
    filesDiv.innerHTML = '';
    const del = document.getElementById('deleteSelectedBtn');
    del.hidden = !(viewMode === 'tree' && state.selected.length > 0);
    del.textContent = `Delete selected (${state.selected.length})`;
    if (viewMode === 'list') renderList(filesDiv);
    else await renderTree(filesDiv);
    document.getElementById('structure').textContent = await (await fetch('/api/structure')).text();
    document.getElementById('result').textContent = await (await fetch('/api/document')).text();
    document.getElementById('statsLine').textContent = formatStats(state.stats);
  }

  function renderList(container) {
    const n = state.files.length;
    state.files.forEach(file => {
      const row = document.createElement('div');
      row.className = 'file-row';
      row.draggable = true;
      row.ondragstart = () => { dragFrom = file.index; };
      row.ondragover = e => { e.preventDefault(); row.classList.add('drag-over'); };
      row.ondragleave = () => row.classList.remove('drag-over');
      row.ondrop = async e => {
        e.preventDefault(); row.classList.remove('drag-over');
        if (dragFrom !== null && dragFrom !== file.index) {
          await applyState(await api('/api/files/reorder', 'POST', { from: dragFrom, to: file.index }));
        }
        dragFrom = null;
      };
      const name = document.createElement('span');
      name.className = 'name';
      name.title = file.name;
      name.textContent = file.name;
      const size = document.createElement('span');
      size.className = 'file-size';
      size.textContent = `${file.chars.toLocaleString()} chars`;
      row.append(name, size,
        button('Up', file.index === 0, () => api('/api/files/move', 'POST', { index: file.index, direction: 'up' })),
        button('Down', file.index === n - 1, () => api('/api/files/move', 'POST', { index: file.index, direction: 'down' })),
        button('Remove', false, () => api(`/api/files/${file.index}`, 'DELETE')));
      container.appendChild(row);
    });
  }

  function button(label, disabled, action) {
    const b = document.createElement('button');
    b.className = 'small';
    b.textContent = label;
    b.disabled = disabled;
    b.onclick = async () => applyState(await action());
    return b;
  }

  async function renderTree(container) {
    const data = await api('/api/tree');
    if (!data) return;
    const ul = document.createElement('ul');
    renderNodes(ul, data.children);
    container.appendChild(ul);
  }

  function renderNodes(ul, nodes) {
    for (const node of nodes) {
      const li = document.createElement('li');
      const arrow = document.createElement('span');
      arrow.className = 'folder-arrow';
      arrow.textContent = node.is_dir ? (node.expanded ? '▼' : '►') : '';
      arrow.onclick = async () => {
        if (!node.is_dir) return;
        await api('/api/folders/toggle', 'POST', { path: node.path });
        await render();
      };
      const cb = document.createElement('input');
      cb.type = 'checkbox';
      cb.checked = node.status === 'checked';
      cb.indeterminate = node.status === 'indeterminate';
      cb.onchange = async () => {
        const res = await api('/api/selection/toggle', 'POST', { path: node.path, is_dir: node.is_dir });
        if (res) { state.selected = res.selected; await render(); }
      };
      const label = document.createElement('span');
      label.textContent = ' ' + node.name;
      li.append(arrow, cb, label);
      if (!node.is_dir) {
        const size = document.createElement('span');
        size.className = 'file-size';
        size.textContent = `${node.sizeKb.toFixed(1)} KB`;
        li.appendChild(size);
      } else if (node.expanded) {
        const child = document.createElement('ul');
        renderNodes(child, node.children);
        li.appendChild(child);
      }
      ul.appendChild(li);
    }
  }

  function formatNum(n) { return n.toLocaleString(); }
  function formatStats(s) {
    if (!s || s.files === 0) return 'No files uploaded yet';
    return `${formatNum(s.files)} file${s.files>1?"s":""} | ${formatNum(s.lines)} line${s.lines>1?"s":""} | ${formatNum(s.words)} word${s.words>1?"s":""} | ${formatNum(s.characters)} character${s.characters>1?"s":""}`;
  }

  // ---------- Template ----------
  async function loadTemplate() {
    const data = await api('/api/template');
    if (data) document.getElementById('templateInput').value = data.template;
  }

  // ---------- Buttons ----------
  document.addEventListener('click', async (evt) => {
    switch (evt.target.id) {
      case 'listViewBtn': viewMode = 'list'; await render(); break;
      case 'treeViewBtn': viewMode = 'tree'; await render(); break;
      case 'deleteSelectedBtn': {
        if (window.confirm(`Delete ${state.selected.length} selected file(s)?`)) {
          await applyState(await api('/api/selection/remove', 'POST', {}));
        }
        break;
      }
      case 'saveTemplateBtn': {
        await api('/api/template', 'PUT', { template: document.getElementById('templateInput').value });
        await refresh();
        break;
      }
      case 'resetTemplateBtn': {
        await api('/api/template/reset', 'POST', {});
        await loadTemplate(); await refresh();
        break;
      }
      case 'copyBtn': {
        await navigator.clipboard.writeText(document.getElementById('result').textContent);
        break;
      }
      case 'copyStructureBtn': {
        await navigator.clipboard.writeText(document.getElementById('structure').textContent);
        break;
      }
      case 'downloadBtn': window.location = '/api/document/download'; break;
      case 'clearBtn': await applyState(await api('/api/files/clear', 'POST', {})); break;
    }
  });
  </script>
</body>
</html>
"""
