"""Static login-card samples returned when no live generation succeeds."""

from types import MappingProxyType

from models import Framework

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sign In</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      display: flex; justify-content: center; align-items: center;
      min-height: 100vh; background: #f1f5f9;
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
    }
    .card {
      width: 100%; max-width: 380px; padding: 2rem;
      background: #ffffff; border-radius: 12px;
      box-shadow: 0 10px 30px rgba(15, 23, 42, 0.1);
    }
    .card h1 { font-size: 1.5rem; color: #0f172a; margin-bottom: 1.5rem; text-align: center; }
    .field { display: flex; flex-direction: column; gap: 0.4rem; margin-bottom: 1rem; }
    .field label { font-size: 0.875rem; color: #475569; }
    .field input {
      padding: 0.7rem 0.9rem; border: 1px solid #cbd5e1; border-radius: 8px; font-size: 1rem;
    }
    .field input:focus { outline: 2px solid #3b82f6; border-color: transparent; }
    .submit {
      width: 100%; padding: 0.8rem; border: none; border-radius: 8px;
      background: #3b82f6; color: #ffffff; font-size: 1rem; cursor: pointer;
    }
    .submit:hover { background: #2563eb; }
  </style>
</head>
<body>
  <!-- Sign-in card -->
  <main class="card">
    <h1>Welcome back</h1>
    <form>
      <div class="field">
        <label for="email">Email</label>
        <input id="email" type="email" placeholder="you@example.com" required>
      </div>
      <div class="field">
        <label for="password">Password</label>
        <input id="password" type="password" placeholder="••••••••" required>
      </div>
      <button class="submit" type="submit">Sign in</button>
    </form>
  </main>
</body>
</html>"""

TAILWIND_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sign In</title>
  <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="min-h-screen flex items-center justify-center bg-slate-100">
  <!-- Sign-in card -->
  <main class="w-full max-w-sm p-8 bg-white rounded-xl shadow-lg">
    <h1 class="text-2xl font-semibold text-slate-900 text-center mb-6">Welcome back</h1>
    <form class="space-y-4">
      <div class="flex flex-col gap-1">
        <label for="email" class="text-sm text-slate-600">Email</label>
        <input id="email" type="email" placeholder="you@example.com" required
               class="px-3 py-2 border border-slate-300 rounded-lg focus:outline-none focus:ring-2 focus:ring-blue-500">
      </div>
      <div class="flex flex-col gap-1">
        <label for="password" class="text-sm text-slate-600">Password</label>
        <input id="password" type="password" placeholder="••••••••" required
               class="px-3 py-2 border border-slate-300 rounded-lg focus:outline-none focus:ring-2 focus:ring-blue-500">
      </div>
      <button type="submit" class="w-full py-2.5 rounded-lg bg-blue-500 hover:bg-blue-600 text-white font-medium">
        Sign in
      </button>
    </form>
  </main>
</body>
</html>"""

REACT_TEMPLATE = """import React, { useState } from "react";

const styles = {
  page: {
    display: "flex", justifyContent: "center", alignItems: "center",
    minHeight: "100vh", background: "#f1f5f9",
    fontFamily: "-apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif",
  },
  card: {
    width: "100%", maxWidth: 380, padding: "2rem", background: "#ffffff",
    borderRadius: 12, boxShadow: "0 10px 30px rgba(15, 23, 42, 0.1)",
  },
  title: { fontSize: "1.5rem", color: "#0f172a", marginBottom: "1.5rem", textAlign: "center" },
  field: { display: "flex", flexDirection: "column", gap: "0.4rem", marginBottom: "1rem" },
  label: { fontSize: "0.875rem", color: "#475569" },
  input: { padding: "0.7rem 0.9rem", border: "1px solid #cbd5e1", borderRadius: 8, fontSize: "1rem" },
  button: {
    width: "100%", padding: "0.8rem", border: "none", borderRadius: 8,
    background: "#3b82f6", color: "#ffffff", fontSize: "1rem", cursor: "pointer",
  },
};

// Sign-in card
function App() {
  const [email, setEmail] = useState("");
  const [password, setPassword] = useState("");

  const handleSubmit = (e) => {
    e.preventDefault();
  };

  return (
    <div style={styles.page}>
      <main style={styles.card}>
        <h1 style={styles.title}>Welcome back</h1>
        <form onSubmit={handleSubmit}>
          <div style={styles.field}>
            <label htmlFor="email" style={styles.label}>Email</label>
            <input id="email" type="email" placeholder="you@example.com" required
                   value={email} onChange={(e) => setEmail(e.target.value)} style={styles.input} />
          </div>
          <div style={styles.field}>
            <label htmlFor="password" style={styles.label}>Password</label>
            <input id="password" type="password" placeholder="••••••••" required
                   value={password} onChange={(e) => setPassword(e.target.value)} style={styles.input} />
          </div>
          <button type="submit" style={styles.button}>Sign in</button>
        </form>
      </main>
    </div>
  );
}

export default App;"""

VUE_TEMPLATE = """<template>
  <!-- Sign-in card -->
  <div class="page">
    <main class="card">
      <h1>Welcome back</h1>
      <form @submit.prevent="submit">
        <div class="field">
          <label for="email">Email</label>
          <input id="email" v-model="email" type="email" placeholder="you@example.com" required>
        </div>
        <div class="field">
          <label for="password">Password</label>
          <input id="password" v-model="password" type="password" placeholder="••••••••" required>
        </div>
        <button class="submit" type="submit">Sign in</button>
      </form>
    </main>
  </div>
</template>

<script>
export default {
  name: "App",
  data() {
    return { email: "", password: "" };
  },
  methods: {
    submit() {},
  },
};
</script>

<style scoped>
.page {
  display: flex; justify-content: center; align-items: center;
  min-height: 100vh; background: #f1f5f9;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
}
.card {
  width: 100%; max-width: 380px; padding: 2rem;
  background: #ffffff; border-radius: 12px;
  box-shadow: 0 10px 30px rgba(15, 23, 42, 0.1);
}
.card h1 { font-size: 1.5rem; color: #0f172a; margin-bottom: 1.5rem; text-align: center; }
.field { display: flex; flex-direction: column; gap: 0.4rem; margin-bottom: 1rem; }
.field label { font-size: 0.875rem; color: #475569; }
.field input { padding: 0.7rem 0.9rem; border: 1px solid #cbd5e1; border-radius: 8px; font-size: 1rem; }
.submit {
  width: 100%; padding: 0.8rem; border: none; border-radius: 8px;
  background: #3b82f6; color: #ffffff; font-size: 1rem; cursor: pointer;
}
</style>"""

TEMPLATES = MappingProxyType({
    Framework.HTML: HTML_TEMPLATE,
    Framework.TAILWIND: TAILWIND_TEMPLATE,
    Framework.REACT: REACT_TEMPLATE,
    Framework.VUE: VUE_TEMPLATE,
})


def get_template(framework) -> str:
    return TEMPLATES[Framework.parse(framework)]
