"""GraphQL documents sent to the GitHub v4 API."""

from __future__ import annotations

REPOSITORY_PAGE_SIZE = 100

LIST_REPOSITORIES = """
query ListRepositories($last: Int!) {
  viewer {
    repositories(last: $last) {
      nodes {
        name
        diskUsage
        owner {
          login
        }
      }
    }
  }
}
"""

# Root entries, their children and grandchildren; grandchildren are not expanded.
REPOSITORY_TREE = """
fragment SubtreeEntries on Tree {
  entries {
    name
    type
    path
    object {
      ... on Tree {
        entries {
          name
          type
          path
        }
      }
    }
  }
}

query RepositoryTree($name: String!, $expression: String!) {
  viewer {
    repository(name: $name) {
      id
      name
      owner {
        login
      }
      diskUsage
      visibility
      object(expression: $expression) {
        ... on Tree {
          entries {
            name
            type
            path
            object {
              ...SubtreeEntries
            }
          }
        }
      }
    }
  }
}
"""

BLOB_TEXT = """
query BlobText($name: String!, $expression: String!) {
  viewer {
    repository(name: $name) {
      object(expression: $expression) {
        ... on Blob {
          text
        }
      }
    }
  }
}
"""
