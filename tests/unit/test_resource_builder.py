"""
Unit tests for ResourceBuilder naming, manifests and drift detection.
"""
from edge_metrics.domain.constants import KubernetesLabels
from edge_metrics.infrastructure.external.kubernetes_client import KubernetesClient
from tests.fakes import make_device


class TestNaming:
    def test_valid_ids_keep_a_readable_name(self, builder):
        assert builder.name_for("rpi-01") == "edge-device-rpi-01"

    def test_rewritten_ids_get_a_hash_suffix(self, builder):
        name = builder.name_for("RPI_01")
        assert name.startswith("edge-device-rpi-01-")
        assert len(name) == len("edge-device-rpi-01-") + 8
        assert builder.name_for("RPI_01") == name

    def test_invalid_characters_collapse(self, builder):
        assert builder.name_for("lab/rack..3").startswith("edge-device-lab-rack-3-")

    def test_ids_differing_only_in_case_or_separators_do_not_collide(self, builder):
        names = {builder.name_for(device_id) for device_id in ("pi-01", "Pi_01", "PI-01", "pi_01")}
        assert len(names) == 4
        assert "edge-device-pi-01" in names

    def test_long_ids_are_truncated_and_unique(self, builder):
        first = builder.name_for("x" * 80 + "a")
        second = builder.name_for("x" * 80 + "b")
        assert len(first) <= 63
        assert len(second) <= 63
        assert first != second

    def test_device_id_prefers_annotation(self, builder):
        annotations = {KubernetesLabels.DEVICE_ID_ANNOTATION: "RPI_01"}
        assert builder.device_id_of("edge-device-rpi-01", annotations) == "RPI_01"

    def test_device_id_falls_back_to_name(self, builder):
        assert builder.device_id_of("edge-device-rpi-01", {}) == "rpi-01"


class TestManifests:
    def test_service_has_no_selector_and_named_ports(self, builder):
        manifest = builder.build_service(make_device("rpi-01"), "monitoring")
        assert manifest["kind"] == "Service"
        assert "selector" not in manifest["spec"]
        assert manifest["metadata"]["labels"][KubernetesLabels.MANAGED_BY] == KubernetesLabels.MANAGED_BY_VALUE
        assert [port["name"] for port in manifest["spec"]["ports"]] == ["metrics", "reload"]

    def test_same_port_is_exposed_once(self, builder):
        manifest = builder.build_service(make_device("rpi-01", port=9100, reload_port=9100), "monitoring")
        assert len(manifest["spec"]["ports"]) == 1

    def test_endpoints_point_at_device_ip(self, builder):
        manifest = builder.build_endpoints(make_device("rpi-01", ip_address="10.1.2.3"), "monitoring")
        assert manifest["subsets"][0]["addresses"] == [{"ip": "10.1.2.3"}]

    def test_replace_keeps_cluster_ip_and_resource_version(self, builder):
        device = make_device("rpi-01")
        observed = KubernetesClient.parse_service(
            {
                "metadata": {"name": "edge-device-rpi-01", "resourceVersion": "42"},
                "spec": {"clusterIP": "10.96.0.7", "ports": []},
            }
        )
        manifest = builder.build_service(device, "monitoring", observed)
        assert manifest["metadata"]["resourceVersion"] == "42"
        assert manifest["spec"]["clusterIP"] == "10.96.0.7"


class TestDriftDetection:
    def test_fresh_manifests_match(self, builder):
        device = make_device("rpi-01")
        service = KubernetesClient.parse_service(builder.build_service(device, "monitoring"))
        endpoints = KubernetesClient.parse_endpoints(builder.build_endpoints(device, "monitoring"))
        assert builder.service_matches(device, service)
        assert builder.endpoints_match(device, endpoints)

    def test_port_change_is_drift(self, builder):
        device = make_device("rpi-01")
        service = KubernetesClient.parse_service(builder.build_service(device, "monitoring"))
        moved = device.with_identity(port=9200)
        assert not builder.service_matches(moved, service)

    def test_address_change_is_drift(self, builder):
        device = make_device("rpi-01")
        endpoints = KubernetesClient.parse_endpoints(builder.build_endpoints(device, "monitoring"))
        moved = device.with_identity(ip_address="10.9.9.9")
        assert not builder.endpoints_match(moved, endpoints)

    def test_extra_labels_on_resource_are_tolerated(self, builder):
        device = make_device("rpi-01")
        manifest = builder.build_service(device, "monitoring")
        manifest["metadata"]["labels"]["team"] = "platform"
        assert builder.service_matches(device, KubernetesClient.parse_service(manifest))
