"""
DevMind — Performance Agent
Specialist agent for performance analysis, bottleneck detection and code
optimization across frontend, backend, data, mobile and network layers.
"""

from __future__ import annotations

from enum import Enum

from agents.base import BaseAgent
from config.prompts import PERFORMANCE_SYSTEM
from pipeline.extractor import select_code_block
from state.schemas import AgentTask, ExtractedArtifactSet, OutputFile


class PerformanceVariant(str, Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    DATABASE = "database"
    ALGORITHM = "algorithm"
    MOBILE = "mobile"
    NETWORK = "network"
    GENERAL = "general"


ANALYSIS_SECTION = "Análisis de Rendimiento"
OPTIMIZATIONS_SECTION = "Recomendaciones de Optimización"
CODE_HINT = "optimizado"


# ── Simulated Responses ───────────────────────
# variant → (bottlenecks, recommendations, optimized code)

_SIMULATED = {
    PerformanceVariant.FRONTEND: (
        ("Re-renderizados innecesarios en listas largas", "Bundle inicial de 1.8 MB sin code splitting"),
        ("Memoizar componentes de fila con React.memo", "Cargar rutas con React.lazy y Suspense"),
        """// Código optimizado: lista memoizada
const Row = React.memo(function Row({ item }) {
  return <li>{item.name}</li>;
});

export function ItemList({ items }) {
  return <ul>{items.map((item) => <Row key={item.id} item={item} />)}</ul>;
}""",
    ),
    PerformanceVariant.BACKEND: (
        ("Operaciones síncronas bloquean el event loop", "Sin caché para respuestas repetidas"),
        ("Reemplazar fs.readFileSync por la API de promesas", "Cachear respuestas calientes en memoria con TTL"),
        """// Código optimizado: handler asíncrono con caché
const cache = new Map();

async function getReport(req, res) {
  const key = req.params.id;
  if (cache.has(key)) return res.json(cache.get(key));
  const report = await buildReport(key);
  cache.set(key, report);
  setTimeout(() => cache.delete(key), 60_000);
  res.json(report);
}""",
    ),
    PerformanceVariant.DATABASE: (
        ("Consultas N+1 al cargar relaciones", "Búsquedas por email sin índice"),
        ("Cargar relaciones con una sola consulta (include/join)", "Crear un índice único sobre users.email"),
        """// Código optimizado: carga de relaciones en una consulta
async function getUsersWithOrders() {
  return User.findAll({
    include: [{ model: Order, attributes: ['id', 'total'] }],
    attributes: ['id', 'name', 'email'],
  });
}""",
    ),
    PerformanceVariant.ALGORITHM: (
        ("Búsqueda de duplicados en O(n²)", "Ordenamiento repetido dentro de un bucle"),
        ("Usar un Set para detectar duplicados en O(n)", "Ordenar una sola vez fuera del bucle"),
        """// Código optimizado: duplicados en O(n)
function findDuplicates(values) {
  const seen = new Set();
  const duplicates = new Set();
  for (const value of values) {
    if (seen.has(value)) duplicates.add(value);
    seen.add(value);
  }
  return [...duplicates];
}""",
    ),
    PerformanceVariant.MOBILE: (
        ("Imágenes a resolución completa en listas", "FlatList sin getItemLayout"),
        ("Servir miniaturas redimensionadas", "Declarar getItemLayout y windowSize en FlatList"),
        """// Código optimizado: FlatList con layout fijo
const ITEM_HEIGHT = 72;

export function Feed({ data }) {
  return (
    <FlatList
      data={data}
      renderItem={renderItem}
      getItemLayout={(_, index) => ({ length: ITEM_HEIGHT, offset: ITEM_HEIGHT * index, index })}
      windowSize={5}
    />
  );
}""",
    ),
    PerformanceVariant.NETWORK: (
        ("Recursos estáticos sin compresión", "Peticiones en cascada al cargar la página"),
        ("Activar compresión gzip/brotli", "Paralelizar peticiones independientes con Promise.all"),
        """// Código optimizado: peticiones en paralelo
async function loadDashboard(api) {
  const [user, stats, alerts] = await Promise.all([
    api.get('/user'),
    api.get('/stats'),
    api.get('/alerts'),
  ]);
  return { user, stats, alerts };
}""",
    ),
    PerformanceVariant.GENERAL: (
        ("Falta de métricas de rendimiento de referencia", "Trabajo costoso repetido en rutas calientes"),
        ("Medir antes de optimizar con un perfilador", "Memoizar cálculos puros costosos"),
        """// Código optimizado: memoización genérica
function memoize(fn) {
  const cache = new Map();
  return (arg) => {
    if (!cache.has(arg)) cache.set(arg, fn(arg));
    return cache.get(arg);
  };
}""",
    ),
}


def _simulated(variant: PerformanceVariant) -> str:
    bottlenecks, recommendations, code = _SIMULATED[variant]
    analysis = "\n".join(f"- **Cuello de botella:** {item}" for item in bottlenecks)
    optimizations = "\n".join(f"{i}. {item}" for i, item in enumerate(recommendations, start=1))
    return (
        f"## {ANALYSIS_SECTION}\n\nTipo de análisis: {variant.value}\n\n{analysis}\n\n"
        f"## {OPTIMIZATIONS_SECTION}\n\n{optimizations}\n\n"
        f"## Código Optimizado\n\n```javascript\n{code}\n```\n"
    )


class PerformanceAgent(BaseAgent):
    name = "performance"
    title = "Performance Agent"
    system_prompt = PERFORMANCE_SYSTEM
    output_subdir = "performance"

    variants = PerformanceVariant
    # Declaration order is tie priority: algorithm, backend and frontend
    # come first, in that order
    keyword_table = {
        PerformanceVariant.ALGORITHM: [
            "algoritmo", "algorithm", "estructura de datos", "data structure",
            "complejidad", "complexity", "big o", "ordenamiento", "sorting",
            "búsqueda", "search", "recursión", "recursion", "optimización",
            "optimization",
        ],
        PerformanceVariant.BACKEND: [
            "backend", "servidor", "server", "api", "database", "base de datos",
            "node", "express", "django", "flask", "spring", "microservicio",
            "microservice", "rest", "graphql",
        ],
        PerformanceVariant.FRONTEND: [
            "frontend", "react", "vue", "angular", "dom", "css", "html", "javascript",
            "ui", "interfaz", "cliente", "browser", "navegador", "renderizado",
            "rendering",
        ],
        PerformanceVariant.DATABASE: [
            "database", "base de datos", "sql", "query", "consulta", "índice",
            "index", "postgres", "mysql", "mongodb", "orm",
        ],
        PerformanceVariant.MOBILE: [
            "mobile", "móvil", "android", "iphone", "react native", "flutter",
            "kotlin", "swift",
        ],
        PerformanceVariant.NETWORK: [
            "network", "latency", "latencia", "cdn", "bandwidth", "ancho de banda",
            "cache", "dns", "tcp", "websocket",
        ],
        PerformanceVariant.GENERAL: [],
    }
    default_variant = PerformanceVariant.GENERAL
    variant_descriptions = {
        PerformanceVariant.FRONTEND: "rendering and client-side loading",
        PerformanceVariant.BACKEND: "server throughput and latency",
        PerformanceVariant.DATABASE: "queries, indexes and data access",
        PerformanceVariant.ALGORITHM: "algorithms and data structures",
        PerformanceVariant.MOBILE: "mobile rendering and resources",
        PerformanceVariant.NETWORK: "transfer size, caching and round trips",
        PerformanceVariant.GENERAL: "overall application performance",
    }

    deliverables = (
        "Detailed performance analysis",
        "Bottlenecks and problems identified",
        "Optimization recommendations",
        "Optimized code where applicable",
    )
    section_titles = (ANALYSIS_SECTION, OPTIMIZATIONS_SECTION)
    simulated_responses = {variant: _simulated(variant) for variant in PerformanceVariant}

    def build_manifest(
        self,
        task: AgentTask,
        variant: Enum,
        artifacts: ExtractedArtifactSet,
    ) -> list[OutputFile]:
        return [
            OutputFile(
                path="performance-analysis.md",
                content=self.report(f"Análisis de Rendimiento: {task.raw_spec}", artifacts.sections[ANALYSIS_SECTION]),
            ),
            OutputFile(
                path="performance-optimizations.md",
                content=self.report("Recomendaciones de Optimización", artifacts.sections[OPTIMIZATIONS_SECTION]),
            ),
            OutputFile(
                path="optimized-code.js",
                content=select_code_block(artifacts.code_blocks, CODE_HINT),
            ),
        ]
