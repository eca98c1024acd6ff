"""Example: Group clusters

Attaches a cluster to a group, renames it and removes it again.
"""

import os

from gitlab_clusters import GitLabClient
from gitlab_clusters.models import AddGroupClusterOptions, EditGroupClusterOptions


def main():
    # Option 1: GITLAB_TOKEN / GITLAB_URL or `gitlab-clusters config set ...`
    client = GitLabClient()

    # Option 2: Explicit credentials
    # client = GitLabClient(private_token="glpat-...", url="https://gitlab.example.com")

    group = os.environ.get("GITLAB_GROUP", "my-org/platform")

    cluster = client.group_clusters.add(
        group,
        AddGroupClusterOptions(
            name="example-cluster",
            environment_scope="staging/*",
            platform_kubernetes_attributes={
                "api_url": os.environ["KUBE_API_URL"],
                "token": os.environ["KUBE_TOKEN"],
            },
        ),
    )
    print(f"Added cluster {cluster.id}")

    cluster = client.group_clusters.edit(
        group, cluster.id, EditGroupClusterOptions(name="example-cluster-renamed")
    )
    print(f"Renamed to {cluster.name}")

    for c in client.group_clusters.list(group):
        print(f"  {c.id}: {c.name} [{c.environment_scope}]")

    client.group_clusters.delete(group, cluster.id)
    print("Removed")

    client.close()


if __name__ == "__main__":
    main()
