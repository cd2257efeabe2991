import numpy as np

from geo_analytics.domain.cluster_metrics import compute_inertia, compute_silhouette
from geo_analytics.domain.geo_kmeans import deterministic_kmeans, seed_centroids


def test_semeadura_comeca_no_meio_e_segue_o_mais_distante():
    X = np.array([[0.0], [0.1], [0.9], [1.0]])
    sementes = seed_centroids(X, 2)
    assert sementes[0, 0] == 0.9
    assert sementes[1, 0] == 0.0


def test_kmeans_separa_dois_grupos():
    out = deterministic_kmeans([[0], [1], [10], [11]], 2)
    assert out.converged
    assert list(out.assignments) == [1, 1, 0, 0]


def test_kmeans_deterministico():
    rng = np.random.default_rng(7)
    dados = rng.normal(size=(60, 3))
    a = deterministic_kmeans(dados, 4)
    b = deterministic_kmeans(dados, 4)
    assert np.array_equal(a.assignments, b.assignments)
    assert np.allclose(a.centroids, b.centroids)


def test_k_maior_que_n_e_reduzido():
    out = deterministic_kmeans([[0, 0], [1, 1], [2, 0]], 10)
    assert out.centroids.shape[0] == 3
    assert sorted(out.assignments) == [0, 1, 2]


def test_limite_de_iteracoes():
    out = deterministic_kmeans([[0], [1], [10], [11]], 2, max_iter=1)
    assert out.iterations == 1
    assert not out.converged


def test_entrada_vazia():
    out = deterministic_kmeans(np.zeros((0, 3)), 3)
    assert len(out.assignments) == 0
    assert out.iterations == 0


def test_silhouette_entre_zero_e_um_para_grupos_separados():
    X = np.array([[0.0], [0.01], [1.0], [0.99]])
    labels = np.array([0, 0, 1, 1])
    s = compute_silhouette(X, labels)
    assert 0.9 < s <= 1.0


def test_silhouette_de_um_unico_cluster_e_zero():
    X = np.array([[0.0], [1.0], [2.0]])
    assert compute_silhouette(X, np.array([0, 0, 0])) == 0.0


def test_cluster_unitario_conta_um():
    X = np.array([[0.0], [1.0], [2.0]])
    assert compute_silhouette(X, np.array([0, 1, 2])) == 1.0


def test_silhouette_com_cluster_unitario_e_pares():
    X = np.array([[0.0], [0.1], [1.0]])
    s = compute_silhouette(X, np.array([0, 0, 1]))
    esperado = (0.9 + (0.9 - 0.1) / 0.9 + 1.0) / 3
    assert abs(s - esperado) < 1e-9


def test_unitario_sobre_ponto_de_outro_cluster_conta_zero():
    X = np.array([[0.0], [0.0], [0.0], [1.0]])
    s = compute_silhouette(X, np.array([0, 0, 1, 2]))
    # par idêntico: 0, 0; unitário colado ao par: 0; unitário isolado: 1
    assert s == 0.25


def test_inercia_no_espaco_normalizado():
    X = np.array([[0.0], [1.0]])
    assert compute_inertia(X, np.array([0, 0]), np.array([[0.5]])) == 0.5
