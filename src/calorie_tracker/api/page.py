"""Single-page tracker UI that consumes the JSON API."""

PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Calorie Tracker</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0;
             background: #fff7ed; color: #1f2937; }
      main { max-width: 48rem; margin: 0 auto; padding: 1.5rem 1rem; }
      h1 { margin: 0; color: #ea580c; }
      section { background: #fff; border-radius: 0.75rem; padding: 1rem;
                margin-bottom: 1rem; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
      .bar { background: #fed7aa; border-radius: 999px; height: 0.75rem; }
      .bar > div { background: #ea580c; border-radius: 999px; height: 100%; }
      .stats { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; }
      .meal { display: flex; align-items: center; gap: 1rem; padding: 0.5rem 0;
              border-bottom: 1px solid #f3f4f6; }
      .meal img, .meal .icon { width: 4rem; height: 4rem; border-radius: 0.5rem;
                               object-fit: cover; background: #fbcfe8; }
      .meal .kcal { margin-left: auto; font-weight: bold; color: #ea580c; }
      .tag { font-size: 0.7rem; background: #db2777; color: #fff;
             padding: 0.1rem 0.4rem; border-radius: 999px; }
      input { padding: 0.4rem 0.6rem; margin: 0.2rem 0; width: 100%; box-sizing: border-box; }
      button { padding: 0.4rem 0.8rem; margin-top: 0.5rem; }
      #preview { max-height: 16rem; display: none; margin: 0.5rem auto; }
      #toast { position: fixed; bottom: 1rem; right: 1rem; padding: 0.6rem 1rem;
               border-radius: 0.5rem; color: #fff; display: none; }
    </style>
  </head>
  <body>
    <main>
      <header>
        <h1>Calorie Tracker</h1>
        <p id="greeting"></p>
      </header>
      <details>
        <summary>Your profile</summary>
        <section>
          <label>Name <input id="p-name" /></label>
          <label>Weight (kg) <input id="p-weight" type="number" placeholder="70" /></label>
          <label>Height (cm) <input id="p-height" type="number" placeholder="170" /></label>
          <label>Age <input id="p-age" type="number" placeholder="25" /></label>
          <label>Daily goal (kcal)
            <input id="p-goal" type="number" placeholder="2000" /></label>
          <button onclick="saveProfile()">Save profile</button>
        </section>
      </details>
      <section>
        <h2>Daily progress</h2>
        <p>Consumed <strong id="consumed"></strong></p>
        <div class="bar"><div id="bar"></div></div>
        <div class="stats">
          <p>Remaining<br /><strong id="remaining"></strong> calories</p>
          <p>Meals<br /><strong id="meal-count"></strong> today</p>
        </div>
      </section>
      <section>
        <h2>Meal photo</h2>
        <input id="photo" type="file" accept="image/*" capture="environment"
               onchange="selectPhoto(event)" />
        <img id="preview" alt="Preview" />
        <button id="analyze" onclick="analyzePhoto()" disabled>Analyze meal</button>
        <button onclick="clearPhoto()">Cancel</button>
      </section>
      <section>
        <h2>Add manually</h2>
        <label>Meal name <input id="m-name" placeholder="e.g. Rice and chicken" /></label>
        <label>Calories <input id="m-calories" type="number" placeholder="e.g. 450" /></label>
        <button onclick="addManual()">Add meal</button>
      </section>
      <section>
        <h2>Today's meals</h2>
        <div id="meals"></div>
        <button id="reset" onclick="resetDay()">Reset day</button>
      </section>
    </main>
    <div id="toast"></div>
    <script>
      let photo = null;
      let analyzing = false;

      function toast(text, ok) {
        const el = document.getElementById('toast');
        el.textContent = text;
        el.style.background = ok ? '#16a34a' : '#dc2626';
        el.style.display = 'block';
        setTimeout(() => { el.style.display = 'none'; }, 3000);
      }

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body)
        });
        const data = await res.json();
        if (!res.ok) { throw new Error(data.error || 'Request failed'); }
        return data;
      }

      function render(state) {
        const p = state.progress;
        document.getElementById('greeting').textContent = state.greeting;
        document.getElementById('consumed').textContent = p.consumed + ' / ' + p.goal + ' kcal';
        document.getElementById('bar').style.width = p.percent + '%';
        document.getElementById('remaining').textContent = p.remaining;
        document.getElementById('meal-count').textContent = p.mealCount;
        document.getElementById('reset').style.display = state.meals.length ? '' : 'none';
        if (state.profile) {
          document.getElementById('p-name').value = state.profile.name;
          document.getElementById('p-weight').value = state.profile.weight;
          document.getElementById('p-height').value = state.profile.height;
          document.getElementById('p-age').value = state.profile.age;
          document.getElementById('p-goal').value = state.profile.dailyGoal;
        }
        const list = document.getElementById('meals');
        list.replaceChildren();
        if (!state.meals.length) {
          list.textContent = 'No meals logged today. Add your first meal above!';
        }
        for (const meal of state.meals) {
          const row = document.createElement('div');
          row.className = 'meal';
          const thumb = document.createElement(meal.imageReference ? 'img' : 'div');
          thumb.className = 'icon';
          if (meal.imageReference) { thumb.src = meal.imageReference; }
          const info = document.createElement('div');
          const name = document.createElement('strong');
          name.textContent = meal.name + ' ';
          info.appendChild(name);
          if (meal.sourceTag === 'ai-estimated') {
            const tag = document.createElement('span');
            tag.className = 'tag';
            tag.textContent = 'AI';
            info.appendChild(tag);
          }
          info.appendChild(document.createElement('br'));
          info.appendChild(document.createTextNode(meal.time));
          const kcal = document.createElement('span');
          kcal.className = 'kcal';
          kcal.textContent = meal.calories + ' kcal';
          row.append(thumb, info, kcal);
          list.appendChild(row);
        }
      }

      async function refresh() { render(await call('GET', '/api/state')); }

      async function saveProfile() {
        try {
          await call('PUT', '/api/profile', {
            name: document.getElementById('p-name').value,
            weight: document.getElementById('p-weight').value,
            height: document.getElementById('p-height').value,
            age: document.getElementById('p-age').value,
            dailyGoal: document.getElementById('p-goal').value
          });
          toast('Profile saved!', true);
          await refresh();
        } catch (err) { toast(err.message, false); }
      }

      async function addManual() {
        try {
          await call('POST', '/api/meals', {
            name: document.getElementById('m-name').value,
            calories: document.getElementById('m-calories').value
          });
          document.getElementById('m-name').value = '';
          document.getElementById('m-calories').value = '';
          toast('Meal added!', true);
          await refresh();
        } catch (err) { toast(err.message, false); }
      }

      function selectPhoto(event) {
        const file = event.target.files[0];
        if (!file) { return; }
        const reader = new FileReader();
        reader.onloadend = () => {
          photo = reader.result;
          const preview = document.getElementById('preview');
          preview.src = photo;
          preview.style.display = 'block';
          document.getElementById('analyze').disabled = false;
        };
        reader.readAsDataURL(file);
      }

      function clearPhoto() {
        photo = null;
        document.getElementById('photo').value = '';
        document.getElementById('preview').style.display = 'none';
        document.getElementById('analyze').disabled = true;
      }

      async function analyzePhoto() {
        if (!photo) { toast('Select a photo of the meal', false); return; }
        if (analyzing) { return; }
        analyzing = true;
        const button = document.getElementById('analyze');
        button.disabled = true;
        button.textContent = 'Analyzing...';
        try {
          await call('POST', '/api/meals/photo', { image: photo });
          toast('Meal analyzed and added!', true);
          clearPhoto();
          await refresh();
        } catch (err) {
          toast(err.message, false);
          clearPhoto();
        } finally {
          analyzing = false;
          button.textContent = 'Analyze meal';
        }
      }

      async function resetDay() {
        try {
          render(await call('POST', '/api/day/reset'));
          toast('Day reset!', true);
        } catch (err) { toast(err.message, false); }
      }

      refresh();
    </script>
  </body>
</html>
"""
