"""
DevMind — Testing Agent
Specialist agent for generating automated tests: environment configuration,
test cases and the mocks they depend on.
"""

from __future__ import annotations

from enum import Enum

from agents.base import BaseAgent
from config.prompts import TESTING_SYSTEM
from pipeline.extractor import select_code_block
from state.schemas import AgentTask, ExtractedArtifactSet, OutputFile


class TestingVariant(str, Enum):
    UNIT = "unit"
    INTEGRATION = "integration"
    E2E = "e2e"


# ── Simulated Responses ───────────────────────
# The cases block comes first and never names config or mocks, so that
# content-hint selection picks each block for the right file.

_CASES = {
    TestingVariant.UNIT: """// generated unit tests
const { calculateTotal } = require('../src/cart');

describe('calculateTotal', () => {
  it('sums item prices times quantities', () => {
    expect(calculateTotal([{ price: 10, qty: 2 }, { price: 5, qty: 1 }])).toBe(25);
  });

  it('returns 0 for an empty cart', () => {
    expect(calculateTotal([])).toBe(0);
  });

  it('rejects negative quantities', () => {
    expect(() => calculateTotal([{ price: 10, qty: -1 }])).toThrow('Invalid quantity');
  });
});""",
    TestingVariant.INTEGRATION: """// generated integration tests
const request = require('supertest');
const app = require('../src/app');

describe('POST /api/users', () => {
  it('creates a user and returns 201', async () => {
    const res = await request(app).post('/api/users').send({ name: 'Ana', email: 'ana@example.com' });
    expect(res.status).toBe(201);
    expect(res.body.email).toBe('ana@example.com');
  });

  it('returns 400 when the email is missing', async () => {
    const res = await request(app).post('/api/users').send({ name: 'Ana' });
    expect(res.status).toBe(400);
  });
});""",
    TestingVariant.E2E: """// generated end-to-end tests
describe('login flow', () => {
  it('signs in with valid credentials', () => {
    cy.visit('/login');
    cy.get('[name=email]').type('ana@example.com');
    cy.get('[name=password]').type('s3cret!');
    cy.get('button[type=submit]').click();
    cy.url().should('include', '/dashboard');
  });

  it('shows an error with a wrong password', () => {
    cy.visit('/login');
    cy.get('[name=email]').type('ana@example.com');
    cy.get('[name=password]').type('wrong');
    cy.get('button[type=submit]').click();
    cy.contains('Credenciales inválidas');
  });
});""",
}

_ENVIRONMENT = {
    TestingVariant.UNIT: "node",
    TestingVariant.INTEGRATION: "node",
    TestingVariant.E2E: "jsdom",
}

_STUBS = {
    TestingVariant.UNIT: """// mocks for unit tests
module.exports = {
  fetchPrices: jest.fn().mockResolvedValue({ apple: 1.5, pear: 2 }),
};""",
    TestingVariant.INTEGRATION: """// mocks for integration tests
module.exports = {
  sendWelcomeEmail: jest.fn().mockResolvedValue({ delivered: true }),
};""",
    TestingVariant.E2E: """// mocks for end-to-end fixtures
module.exports = {
  user: { email: 'ana@example.com', password: 's3cret!' },
  mockSession: { token: 'fake-token', expiresIn: 3600 },
};""",
}


def _simulated(variant: TestingVariant) -> str:
    config = (
        "// Jest configuration\n"
        "module.exports = {\n"
        f"  testEnvironment: '{_ENVIRONMENT[variant]}',\n"
        "  collectCoverage: true,\n"
        "  coverageThreshold: { global: { lines: 80 } },\n"
        "};"
    )
    return (
        f"## Casos de Prueba\n\n```javascript\n{_CASES[variant]}\n```\n\n"
        f"## Configuración\n\n```javascript\n{config}\n```\n\n"
        f"## Mocks\n\n```javascript\n{_STUBS[variant]}\n```\n"
    )


class TestingAgent(BaseAgent):
    name = "testing"
    title = "Testing Agent"
    system_prompt = TESTING_SYSTEM
    output_subdir = "testing"

    variants = TestingVariant
    keyword_table = {
        TestingVariant.UNIT: [
            "unitaria", "unit", "función", "function", "clase", "class",
            "componente", "component",
        ],
        TestingVariant.INTEGRATION: [
            "integración", "integration", "módulo", "module", "servicio",
            "service", "api",
        ],
        TestingVariant.E2E: [
            "e2e", "end-to-end", "flujo", "flow", "usuario", "user", "interfaz",
            "ui", "cypress",
        ],
    }
    default_variant = TestingVariant.UNIT
    variant_descriptions = {
        TestingVariant.UNIT: "unit tests",
        TestingVariant.INTEGRATION: "integration tests",
        TestingVariant.E2E: "end-to-end tests",
    }

    deliverables = (
        "Test environment configuration",
        "Test cases for positive and negative scenarios",
        "Mocks and stubs the tests need",
    )

    simulated_responses = {variant: _simulated(variant) for variant in TestingVariant}

    def build_manifest(
        self,
        task: AgentTask,
        variant: Enum,
        artifacts: ExtractedArtifactSet,
    ) -> list[OutputFile]:
        blocks = artifacts.code_blocks
        return [
            OutputFile(path="jest.config.js", content=select_code_block(blocks, "config")),
            OutputFile(path="__tests__/generated.test.js", content=select_code_block(blocks, "test")),
            OutputFile(path="__mocks__/generated.mock.js", content=select_code_block(blocks, "mock")),
        ]
