"""
DevMind — Security Agent
Specialist agent for vulnerability analysis, remediation and secure
configuration of authentication flows, APIs and code.
"""

from __future__ import annotations

from enum import Enum

from agents.base import BaseAgent
from config.prompts import SECURITY_SYSTEM
from pipeline.extractor import select_code_block
from state.schemas import AgentTask, ExtractedArtifactSet, OutputFile


class SecurityVariant(str, Enum):
    AUTH = "auth"
    API = "api"
    CODE = "code"


ANALYSIS_SECTION = "Análisis de Vulnerabilidades"
FIXES_SECTION = "Correcciones Recomendadas"


# ── Simulated Responses ───────────────────────

_FINDINGS = {
    SecurityVariant.AUTH: (
        ("Almacenamiento inseguro de contraseñas", "Alta",
         "Las contraseñas se guardan con MD5, vulnerable a fuerza bruta y tablas rainbow."),
        ("Sin protección contra fuerza bruta", "Media",
         "El endpoint de login no limita intentos fallidos por usuario ni por IP."),
        ("Tokens JWT sin expiración", "Alta",
         "Los tokens emitidos no incluyen `exp`, por lo que una filtración es permanente."),
    ),
    SecurityVariant.API: (
        ("Falta de validación de entrada", "Alta",
         "Los parámetros de los endpoints llegan sin validar a la capa de datos."),
        ("CORS demasiado permisivo", "Media",
         "La API acepta `Access-Control-Allow-Origin: *` con credenciales."),
        ("Sin límite de peticiones", "Media",
         "Ningún endpoint aplica rate limiting, lo que facilita el abuso y la denegación de servicio."),
    ),
    SecurityVariant.CODE: (
        ("Inyección SQL", "Crítica",
         "Las consultas se construyen concatenando cadenas con datos del usuario."),
        ("Cross-Site Scripting (XSS)", "Alta",
         "Contenido del usuario se inserta en el DOM mediante `innerHTML` sin sanitizar."),
        ("Dependencias con vulnerabilidades conocidas", "Media",
         "Varias dependencias tienen CVE publicados; falta una auditoría periódica."),
    ),
}

_FIXES = {
    SecurityVariant.AUTH: (
        "Migrar el hash de contraseñas a bcrypt con al menos 12 rondas.",
        "Limitar los intentos de login (5 por cada 15 minutos) y bloquear temporalmente la cuenta.",
        "Emitir tokens JWT con expiración corta y rotar los refresh tokens.",
    ),
    SecurityVariant.API: (
        "Validar cada petición con un esquema (Joi o express-validator).",
        "Restringir CORS a una lista explícita de orígenes.",
        "Aplicar rate limiting por IP con express-rate-limit.",
    ),
    SecurityVariant.CODE: (
        "Usar consultas parametrizadas en todos los accesos a base de datos.",
        "Sanitizar el HTML con DOMPurify y preferir `textContent`.",
        "Ejecutar `npm audit` en CI y actualizar las dependencias afectadas.",
    ),
}

_CONFIG = {
    SecurityVariant.AUTH: """// security config: authentication
module.exports = {
  password: { algorithm: 'bcrypt', saltRounds: 12 },
  jwt: { expiresIn: '15m', refreshExpiresIn: '7d', algorithm: 'HS256' },
  loginRateLimit: { windowMs: 15 * 60 * 1000, max: 5 },
};""",
    SecurityVariant.API: """// security config: api
module.exports = {
  cors: { origin: ['https://app.example.com'], credentials: true },
  rateLimit: { windowMs: 15 * 60 * 1000, max: 100 },
  helmet: { contentSecurityPolicy: true, hsts: { maxAge: 31536000 } },
};""",
    SecurityVariant.CODE: """// security config: code
module.exports = {
  database: { parameterizedQueries: true },
  sanitizer: { library: 'dompurify', allowedTags: ['b', 'i', 'a', 'p'] },
  audit: { command: 'npm audit --audit-level=moderate', failOnHigh: true },
};""",
}


def _simulated(variant: SecurityVariant) -> str:
    findings = "\n\n".join(
        f"### {i}. {name}\n**Severidad: {severity}**\n\n{detail}"
        for i, (name, severity, detail) in enumerate(_FINDINGS[variant], start=1)
    )
    fixes = "\n".join(f"{i}. {fix}" for i, fix in enumerate(_FIXES[variant], start=1))
    return (
        f"## {ANALYSIS_SECTION}\n\n{findings}\n\n"
        f"## {FIXES_SECTION}\n\n{fixes}\n\n"
        f"## Configuración Segura\n\n```javascript\n{_CONFIG[variant]}\n```\n"
    )


class SecurityAgent(BaseAgent):
    name = "security"
    title = "Security Agent"
    system_prompt = SECURITY_SYSTEM
    output_subdir = "security"

    variants = SecurityVariant
    # Declaration order is tie priority: code, then api, then auth
    keyword_table = {
        SecurityVariant.CODE: [
            "código", "code", "dependencias", "dependencies", "vulnerabilidad",
            "vulnerability", "inyección", "injection", "xss", "csrf",
        ],
        SecurityVariant.API: [
            "api", "endpoint", "rest", "graphql", "http", "https",
            "servicio", "service", "microservicio", "microservice",
        ],
        SecurityVariant.AUTH: [
            "autenticación", "authentication", "autorización", "authorization",
            "login", "jwt", "oauth", "permisos", "permissions",
        ],
    }
    default_variant = SecurityVariant.CODE
    variant_descriptions = {
        SecurityVariant.AUTH: "authentication and authorization",
        SecurityVariant.API: "APIs and endpoints",
        SecurityVariant.CODE: "code and dependencies",
    }

    deliverables = (
        "Security vulnerability analysis",
        "Recommended fixes for every problem found",
        "Secure configuration for the affected area",
        "Security best practices to adopt",
    )
    section_titles = (ANALYSIS_SECTION, FIXES_SECTION)
    simulated_responses = {variant: _simulated(variant) for variant in SecurityVariant}

    def build_manifest(
        self,
        task: AgentTask,
        variant: Enum,
        artifacts: ExtractedArtifactSet,
    ) -> list[OutputFile]:
        return [
            OutputFile(
                path="security-analysis.md",
                content=self.report(f"Análisis de Seguridad: {task.raw_spec}", artifacts.sections[ANALYSIS_SECTION]),
            ),
            OutputFile(
                path="security-fixes.md",
                content=self.report("Correcciones de Seguridad Recomendadas", artifacts.sections[FIXES_SECTION]),
            ),
            OutputFile(
                path="security-config.js",
                content=select_code_block(artifacts.code_blocks, "config"),
            ),
        ]
