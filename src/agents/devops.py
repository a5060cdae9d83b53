"""
DevMind — DevOps Agent
Specialist agent for delivery infrastructure: CI pipelines, deployments,
containers, infrastructure as code and monitoring.
"""

from __future__ import annotations

from enum import Enum

from agents.base import BaseAgent
from config.prompts import DEVOPS_SYSTEM
from pipeline.extractor import select_code_block
from state.schemas import AgentTask, CodeBlock, ExtractedArtifactSet, OutputFile


class DevOpsVariant(str, Enum):
    CI = "ci"
    CD = "cd"
    DOCKER = "docker"
    IAC = "iac"
    MONITORING = "monitoring"


DOCS_SECTION = "Documentación"

CONFIG_LANGUAGES = ("yaml", "yml", "json", "hcl", "terraform", "dockerfile", "toml", "ini")
SCRIPT_LANGUAGES = ("bash", "sh", "shell", "zsh")

# Content hint used to pick the configuration block for each variant
CONFIG_HINTS = {
    DevOpsVariant.CI: "jobs",
    DevOpsVariant.CD: "deployment",
    DevOpsVariant.DOCKER: "services",
    DevOpsVariant.IAC: "resources",
    DevOpsVariant.MONITORING: "scrape",
}


# ── Simulated Responses ───────────────────────
# variant → (documentation, yaml configuration, deploy script)

_SIMULATED = {
    DevOpsVariant.CI: (
        """Pipeline de integración continua con GitHub Actions.

1. Instalar dependencias con caché de npm
2. Ejecutar linters y pruebas en cada push y pull request
3. Publicar el informe de cobertura como artefacto""",
        """name: ci
on: [push, pull_request]
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - uses: actions/setup-node@v4
        with:
          node-version: 20
          cache: npm
      - run: npm ci
      - run: npm run lint
      - run: npm test -- --coverage""",
        """#!/usr/bin/env bash
set -euo pipefail
npm ci
npm run lint
npm test""",
    ),
    DevOpsVariant.CD: (
        """Despliegue continuo a Kubernetes.

1. Construir y etiquetar la imagen con el SHA del commit
2. Aplicar el manifiesto del Deployment
3. Esperar a que el rollout termine antes de dar el despliegue por bueno""",
        """apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
spec:
  replicas: 3
  selector:
    matchLabels:
      app: web
  template:
    metadata:
      labels:
        app: web
    spec:
      containers:
        - name: web
          image: registry.example.com/web:latest
          ports:
            - containerPort: 3000""",
        """#!/usr/bin/env bash
set -euo pipefail
TAG="${1:-$(git rev-parse --short HEAD)}"
docker build -t "registry.example.com/web:${TAG}" .
docker push "registry.example.com/web:${TAG}"
kubectl set image deployment/web web="registry.example.com/web:${TAG}"
kubectl rollout status deployment/web""",
    ),
    DevOpsVariant.DOCKER: (
        """Entorno contenerizado con Docker Compose.

1. Servicio `web` construido desde el Dockerfile del proyecto
2. Servicio `db` con PostgreSQL y volumen persistente
3. Variables sensibles en un fichero `.env` fuera del control de versiones""",
        """services:
  web:
    build: .
    ports:
      - "3000:3000"
    env_file: .env
    depends_on:
      - db
  db:
    image: postgres:16
    volumes:
      - db-data:/var/lib/postgresql/data
volumes:
  db-data:""",
        """#!/usr/bin/env bash
set -euo pipefail
docker compose pull
docker compose up -d --build
docker compose ps""",
    ),
    DevOpsVariant.IAC: (
        """Infraestructura como código con CloudFormation.

1. Bucket S3 versionado para los artefactos de la aplicación
2. Stack parametrizado por entorno
3. Despliegue idempotente con `aws cloudformation deploy`""",
        """AWSTemplateFormatVersion: "2010-09-09"
Parameters:
  Environment:
    Type: String
    Default: staging
Resources:
  ArtifactsBucket:
    Type: AWS::S3::Bucket
    Properties:
      BucketName: !Sub "app-artifacts-${Environment}"
      VersioningConfiguration:
        Status: Enabled""",
        """#!/usr/bin/env bash
set -euo pipefail
ENVIRONMENT="${1:-staging}"
aws cloudformation deploy \\
  --template-file devops-config.yml \\
  --stack-name "app-${ENVIRONMENT}" \\
  --parameter-overrides "Environment=${ENVIRONMENT}"
aws cloudformation describe-stacks --stack-name "app-${ENVIRONMENT}" --output table""",
    ),
    DevOpsVariant.MONITORING: (
        """Monitoreo con Prometheus y Grafana.

1. Prometheus recoge las métricas de la aplicación cada 15 segundos
2. Alertas sobre latencia p95 y tasa de errores
3. Paneles de Grafana sobre los mismos indicadores""",
        """global:
  scrape_interval: 15s
scrape_configs:
  - job_name: web
    static_configs:
      - targets: ["web:3000"]
rule_files:
  - alerts.yml""",
        """#!/usr/bin/env bash
set -euo pipefail
docker run -d --name prometheus -p 9090:9090 \\
  -v "$(pwd)/devops-config.yml:/etc/prometheus/prometheus.yml" prom/prometheus
docker run -d --name grafana -p 3001:3000 grafana/grafana""",
    ),
}


def _simulated(variant: DevOpsVariant) -> str:
    docs, config, script = _SIMULATED[variant]
    return (
        f"## {DOCS_SECTION}\n\nTipo de configuración: {variant.value}\n\n{docs}\n\n"
        f"## Configuración\n\n```yaml\n{config}\n```\n\n"
        f"## Script de Despliegue\n\n```bash\n{script}\n```\n"
    )


def _in_languages(blocks: list[CodeBlock], languages: tuple[str, ...]) -> list[CodeBlock]:
    return [block for block in blocks if block.language in languages]


class DevOpsAgent(BaseAgent):
    name = "devops"
    title = "DevOps Agent"
    system_prompt = DEVOPS_SYSTEM
    output_subdir = "devops"

    variants = DevOpsVariant
    keyword_table = {
        DevOpsVariant.CI: [
            "ci", "integración continua", "continuous integration", "github actions",
            "jenkins", "gitlab ci", "travis", "build", "compilación", "test", "prueba",
        ],
        DevOpsVariant.CD: [
            "cd", "despliegue continuo", "continuous deployment", "delivery", "entrega",
            "deploy", "desplegar", "release", "publicar", "kubernetes", "k8s",
        ],
        DevOpsVariant.DOCKER: [
            "docker", "contenedor", "container", "dockerfile", "docker-compose",
            "imagen", "image", "virtualización", "virtualization",
        ],
        DevOpsVariant.IAC: [
            "iac", "infraestructura como código", "infrastructure as code", "terraform",
            "cloudformation", "pulumi", "ansible", "chef", "puppet", "provisioning",
        ],
        DevOpsVariant.MONITORING: [
            "monitoring", "monitoreo", "observabilidad", "observability", "prometheus",
            "grafana", "alertas", "alerts", "logs", "métricas", "metrics", "dashboard",
        ],
    }
    default_variant = DevOpsVariant.CI
    variant_descriptions = {
        DevOpsVariant.CI: "continuous integration",
        DevOpsVariant.CD: "continuous deployment",
        DevOpsVariant.DOCKER: "containers",
        DevOpsVariant.IAC: "infrastructure as code",
        DevOpsVariant.MONITORING: "monitoring and alerting",
    }

    deliverables = (
        "Documentation of the proposed setup",
        "Configuration files",
        "A deployment script",
    )
    section_titles = (DOCS_SECTION,)
    code_languages = CONFIG_LANGUAGES + SCRIPT_LANGUAGES
    simulated_responses = {variant: _simulated(variant) for variant in DevOpsVariant}

    def build_manifest(
        self,
        task: AgentTask,
        variant: Enum,
        artifacts: ExtractedArtifactSet,
    ) -> list[OutputFile]:
        blocks = artifacts.code_blocks
        config = select_code_block(_in_languages(blocks, CONFIG_LANGUAGES), CONFIG_HINTS.get(variant))
        script = select_code_block(_in_languages(blocks, SCRIPT_LANGUAGES), None)
        return [
            OutputFile(
                path="devops-documentation.md",
                content=self.report(f"Documentación DevOps: {task.raw_spec}", artifacts.sections[DOCS_SECTION]),
            ),
            OutputFile(path="devops-config.yml", content=config),
            OutputFile(path="deploy.sh", content=script, executable=True),
        ]
