"""
DevMind — Database Agent
Specialist agent for schema design: documentation plus models, migrations,
seed data and common queries for relational or document databases.
"""

from __future__ import annotations

from enum import Enum

from agents.base import BaseAgent
from config.prompts import DATABASE_SYSTEM
from pipeline.extractor import select_code_block
from state.schemas import AgentTask, ExtractedArtifactSet, OutputFile


class DatabaseVariant(str, Enum):
    NOSQL = "nosql"
    SQL = "sql"


DESIGN_SECTION = "Diseño de Base de Datos"


# ── Simulated Responses ───────────────────────
# Block order is models, migrations, seeds, queries; no block mentions a
# later block's hint.

_DESIGN = {
    DatabaseVariant.SQL: """Modelo relacional normalizado (3FN) sobre PostgreSQL.

### Tablas
- **users**: id (PK), name, email (único), created_at
- **posts**: id (PK), user_id (FK → users.id), title, body, published_at
- **comments**: id (PK), post_id (FK → posts.id), user_id (FK → users.id), body

### Índices
- `users.email` único
- `posts.user_id` y `comments.post_id` para los joins más frecuentes""",
    DatabaseVariant.NOSQL: """Modelo de documentos sobre MongoDB.

### Colecciones
- **users**: datos de perfil con direcciones embebidas
- **posts**: documento por publicación con referencia `authorId` y comentarios recientes embebidos

### Índices
- `users.email` único
- `posts.authorId` + `publishedAt` descendente para el feed""",
}

_BLOCKS = {
    DatabaseVariant.SQL: (
        """// models (Sequelize)
const User = sequelize.define('User', {
  name: { type: DataTypes.STRING, allowNull: false },
  email: { type: DataTypes.STRING, allowNull: false, unique: true },
});

const Post = sequelize.define('Post', {
  title: { type: DataTypes.STRING, allowNull: false },
  body: DataTypes.TEXT,
});

User.hasMany(Post, { foreignKey: 'user_id' });
Post.belongsTo(User, { foreignKey: 'user_id' });""",
        """// migrations
module.exports = {
  up: async (queryInterface, Sequelize) => {
    await queryInterface.createTable('users', {
      id: { type: Sequelize.INTEGER, primaryKey: true, autoIncrement: true },
      name: { type: Sequelize.STRING, allowNull: false },
      email: { type: Sequelize.STRING, allowNull: false, unique: true },
    });
  },
  down: async (queryInterface) => {
    await queryInterface.dropTable('users');
  },
};""",
        """// seeds
module.exports = {
  up: async (queryInterface) => {
    await queryInterface.bulkInsert('users', [
      { name: 'Ana', email: 'ana@example.com' },
      { name: 'Luis', email: 'luis@example.com' },
    ]);
  },
};""",
        """// queries
async function postsByUser(userId) {
  return Post.findAll({ where: { user_id: userId }, order: [['published_at', 'DESC']] });
}

module.exports = { postsByUser };""",
    ),
    DatabaseVariant.NOSQL: (
        """// models (Mongoose)
const userSchema = new mongoose.Schema({
  name: { type: String, required: true },
  email: { type: String, required: true, unique: true },
  addresses: [{ street: String, city: String }],
});

const postSchema = new mongoose.Schema({
  authorId: { type: mongoose.Schema.Types.ObjectId, ref: 'User', index: true },
  title: String,
  publishedAt: Date,
});""",
        """// migrations
module.exports = {
  async up(db) {
    await db.collection('posts').createIndex({ authorId: 1, publishedAt: -1 });
  },
  async down(db) {
    await db.collection('posts').dropIndex('authorId_1_publishedAt_-1');
  },
};""",
        """// seeds
module.exports = async function seed(db) {
  await db.collection('users').insertMany([
    { name: 'Ana', email: 'ana@example.com', addresses: [] },
    { name: 'Luis', email: 'luis@example.com', addresses: [] },
  ]);
};""",
        """// queries
async function feedFor(authorId, limit = 20) {
  return Post.find({ authorId }).sort({ publishedAt: -1 }).limit(limit).lean();
}

module.exports = { feedFor };""",
    ),
}

_BLOCK_HEADINGS = ("Modelos", "Migraciones", "Datos Iniciales", "Consultas")


def _simulated(variant: DatabaseVariant) -> str:
    blocks = "\n\n".join(
        f"## {heading}\n\n```javascript\n{code}\n```"
        for heading, code in zip(_BLOCK_HEADINGS, _BLOCKS[variant])
    )
    return f"## {DESIGN_SECTION}\n\nTipo de base de datos: {variant.value}\n\n{_DESIGN[variant]}\n\n{blocks}\n"


class DatabaseAgent(BaseAgent):
    name = "database"
    title = "Database Agent"
    system_prompt = DATABASE_SYSTEM
    output_subdir = "database"

    # NoSQL is declared first: it wins ties and is the default
    variants = DatabaseVariant
    keyword_table = {
        DatabaseVariant.NOSQL: [
            "nosql", "mongodb", "mongo", "documento", "document", "collection",
            "colección", "firebase",
        ],
        DatabaseVariant.SQL: [
            "relacional", "sql", "mysql", "postgresql", "postgres", "sqlite",
            "foreign key", "join",
        ],
    }
    default_variant = DatabaseVariant.NOSQL
    variant_descriptions = {
        DatabaseVariant.SQL: "relational",
        DatabaseVariant.NOSQL: "document store",
    }

    deliverables = (
        "Database design with entities, relations and indexes",
        "Data models",
        "Migrations",
        "Seed data",
        "Common queries",
    )
    section_titles = (DESIGN_SECTION,)
    simulated_responses = {variant: _simulated(variant) for variant in DatabaseVariant}

    def build_manifest(
        self,
        task: AgentTask,
        variant: Enum,
        artifacts: ExtractedArtifactSet,
    ) -> list[OutputFile]:
        blocks = artifacts.code_blocks
        return [
            OutputFile(
                path="db-design.md",
                content=self.report(f"Diseño de Base de Datos: {task.raw_spec}", artifacts.sections[DESIGN_SECTION]),
            ),
            OutputFile(path="models/models.js", content=select_code_block(blocks, "models")),
            OutputFile(path="migrations/migrations.js", content=select_code_block(blocks, "migrations")),
            OutputFile(path="seeds/seeds.js", content=select_code_block(blocks, "seeds")),
            OutputFile(path="queries.js", content=select_code_block(blocks, "queries")),
        ]
