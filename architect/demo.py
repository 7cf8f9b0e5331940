"""
demo.py — Offline generation service
=====================================
Stands in for the remote service when demo mode is on: waits a moment and
returns a canned login-card component, so the client can be explored without
a running backend.
"""

from __future__ import annotations

import asyncio
import logging

from architect.states import GenerationResult

logger = logging.getLogger(__name__)

DEMO_TEMPLATE = """<div class="flex items-center justify-center min-h-screen" style="background: #0f172a;">
  <div class="relative p-8 rounded-2xl" style="
    background: rgba(255,255,255,0.05);
    backdrop-filter: blur(20px);
    border: 1px solid rgba(255,255,255,0.1);
    width: 380px;
  ">
    <h2 class="text-2xl font-bold text-center mb-2" style="color: #ffffff;">Welcome Back</h2>
    <p class="text-center mb-8" style="color: #94a3b8;">Sign in to your account</p>

    <div class="mb-5">
      <label class="block mb-2" style="color: #cbd5e1;">Email</label>
      <input type="email" placeholder="you@example.com" [(ngModel)]="email" />
    </div>

    <div class="mb-6">
      <label class="block mb-2" style="color: #cbd5e1;">Password</label>
      <input type="password" placeholder="••••••••" [(ngModel)]="password" />
    </div>

    <button (click)="onLogin()" style="width:100%; padding:12px; background:#6366f1; color:#ffffff;">
      Sign In
    </button>
  </div>
</div>"""

DEMO_TYPESCRIPT = """import { Component } from '@angular/core';

@Component({
  selector: 'app-login-card',
  templateUrl: './login-card.component.html',
  styleUrls: ['./login-card.component.scss']
})
export class LoginCardComponent {
  email: string = '';
  password: string = '';

  onLogin(): void {
    // Hand credentials to the auth service
    console.log('Login attempted', { email: this.email });
  }
}"""

DEMO_PAYLOAD = {
    "template": DEMO_TEMPLATE,
    "typescript": DEMO_TYPESCRIPT,
    "success": True,
    "iterations": 1,
    "validation": {
        "is_valid": True,
        "errors": [],
        "warnings": ["Design system fonts not explicitly referenced (applied via global styles)"],
        "passed": [
            "Curly braces balanced",
            "Component class exported",
            "All colors comply with design system",
        ],
    },
    "audit_trail": [
        {"attempt": 1, "validation": {"is_valid": True, "errors": [], "warnings": []}},
    ],
}


class DemoGenerationService:

    def __init__(self, delay: float = 2.0):
        self.delay = delay

    async def generate(self, prompt: str, session_id: str) -> GenerationResult:
        logger.info("[demo] Simulating generation for %r (session %s)", prompt, session_id)
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return GenerationResult.model_validate(DEMO_PAYLOAD)
