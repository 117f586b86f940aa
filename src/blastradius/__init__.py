"""blastradius: static test impact analysis for TypeScript/JavaScript projects.

Given a set of changed files, builds a file-level import graph (monorepo
aware, content-hash cached), walks it in reverse to find dependent tests,
adds naming/folder/route heuristics, and scores the change's risk.
"""

__version__ = "0.1.0"
